from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, computed_field, model_validator

from linkhub.schemas.common import CamelModel, deprecated_field


class ClickEventRecord(BaseModel):
    """Click row as written to the analytics datasource."""

    timestamp: str
    click_id: str
    link_id: str
    url: str
    ip: str = ''
    continent: str = ''
    country: str = ''
    city: str = ''
    region: str = ''
    device: str = ''
    device_vendor: str = ''
    device_model: str = ''
    browser: str = ''
    browser_version: str = ''
    engine: str = ''
    os: str = ''
    os_version: str = ''
    ua: str = ''
    bot: int = 0
    qr: int = 0
    referer: str = ''
    referer_url: str = ''


class ClickEvent(CamelModel):
    id: str
    url: str
    continent: str | None = None
    country: str | None = None
    city: str | None = None
    region: str | None = None
    device: str | None = None
    browser: str | None = None
    os: str | None = None
    referer: str | None = None
    referer_url: str | None = None
    qr: bool | None = None
    ip: str | None = None


class LinkEvent(CamelModel):
    id: str
    domain: str
    key: str
    short_link: str
    url: str
    title: str | None = None


# deprecated top-level field -> (nested object, canonical attribute)
COMMON_DEPRECATED_FIELDS: dict[str, tuple[str, str]] = {
    'click_id': ('click', 'id'),
    'link_id': ('link', 'id'),
    'domain': ('link', 'domain'),
    'key': ('link', 'key'),
    'url': ('click', 'url'),
    'continent': ('click', 'continent'),
    'country': ('click', 'country'),
    'city': ('click', 'city'),
    'device': ('click', 'device'),
    'browser': ('click', 'browser'),
    'os': ('click', 'os'),
    'referer': ('click', 'referer'),
    'referer_url': ('click', 'referer_url'),
    'qr': ('click', 'qr'),
    'ip': ('click', 'ip'),
}




class DeprecatedEventFieldsModel(CamelModel):
    """Event response that still exposes the flat pre-v1 fields.

    Each deprecated field is read from its nested canonical value whenever the
    model is serialized. A deprecated value sent on input must agree with it.
    """

    deprecated_fields: ClassVar[dict[str, tuple[str, str]]] = COMMON_DEPRECATED_FIELDS

    link: LinkEvent
    click: ClickEvent

    @model_validator(mode='wrap')
    @classmethod
    def check_deprecated_fields(cls, data, handler):
        supplied: dict[str, object] = {}
        if isinstance(data, dict):
            data = dict(data)
            for field_name in cls.deprecated_fields:
                alias = cls.model_computed_fields[field_name].alias or field_name
                for input_key in {alias, field_name}:
                    if input_key in data:
                        supplied[field_name] = data.pop(input_key)

        model = handler(data)
        for field_name, value in supplied.items():
            if value is None:
                continue
            parent, attribute = cls.deprecated_fields[field_name]
            canonical = getattr(model, field_name)
            if value != canonical and not (isinstance(value, Enum) and value.value == canonical):
                alias = cls.model_computed_fields[field_name].alias or field_name
                raise ValueError(f'`{alias}` must equal `{parent}.{attribute}`')
        return model

    @computed_field(alias='click_id', **deprecated_field('Deprecated. Use `click.id` instead.'))
    @property
    def click_id(self) -> str:
        return self.click.id

    @computed_field(alias='link_id', **deprecated_field('Deprecated. Use `link.id` instead.'))
    @property
    def link_id(self) -> str:
        return self.link.id

    @computed_field(alias='domain', **deprecated_field('Deprecated. Use `link.domain` instead.'))
    @property
    def domain(self) -> str:
        return self.link.domain

    @computed_field(alias='key', **deprecated_field('Deprecated. Use `link.key` instead.'))
    @property
    def key(self) -> str:
        return self.link.key

    @computed_field(alias='url', **deprecated_field('Deprecated. Use `click.url` instead.'))
    @property
    def url(self) -> str:
        return self.click.url

    @computed_field(alias='continent', **deprecated_field('Deprecated. Use `click.continent` instead.'))
    @property
    def continent(self) -> str | None:
        return self.click.continent

    @computed_field(alias='country', **deprecated_field('Deprecated. Use `click.country` instead.'))
    @property
    def country(self) -> str | None:
        return self.click.country

    @computed_field(alias='city', **deprecated_field('Deprecated. Use `click.city` instead.'))
    @property
    def city(self) -> str | None:
        return self.click.city

    @computed_field(alias='device', **deprecated_field('Deprecated. Use `click.device` instead.'))
    @property
    def device(self) -> str | None:
        return self.click.device

    @computed_field(alias='browser', **deprecated_field('Deprecated. Use `click.browser` instead.'))
    @property
    def browser(self) -> str | None:
        return self.click.browser

    @computed_field(alias='os', **deprecated_field('Deprecated. Use `click.os` instead.'))
    @property
    def os(self) -> str | None:
        return self.click.os

    @computed_field(alias='referer', **deprecated_field('Deprecated. Use `click.referer` instead.'))
    @property
    def referer(self) -> str | None:
        return self.click.referer

    @computed_field(alias='referer_url', **deprecated_field('Deprecated. Use `click.refererUrl` instead.'))
    @property
    def referer_url(self) -> str | None:
        return self.click.referer_url

    @computed_field(alias='qr', **deprecated_field('Deprecated. Use `click.qr` instead.'))
    @property
    def qr(self) -> bool | None:
        return self.click.qr

    @computed_field(alias='ip', **deprecated_field('Deprecated. Use `click.ip` instead.'))
    @property
    def ip(self) -> str | None:
        return self.click.ip
