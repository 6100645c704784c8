from enum import Enum


class WorkspaceRole(str, Enum):
    OWNER = 'owner'
    MEMBER = 'member'


class ImportProvider(str, Enum):
    BITLY = 'bitly'


class PaymentProcessor(str, Enum):
    STRIPE = 'stripe'
    SHOPIFY = 'shopify'
    PADDLE = 'paddle'
