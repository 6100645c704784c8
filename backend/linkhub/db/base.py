from linkhub.models.domain import Domain
from linkhub.models.folder import Folder
from linkhub.models.link import Link, link_tags
from linkhub.models.tag import Tag
from linkhub.models.user import User
from linkhub.models.workspace import Workspace, WorkspaceUser

__all__ = [
    'User',
    'Workspace',
    'WorkspaceUser',
    'Domain',
    'Folder',
    'Tag',
    'Link',
    'link_tags',
]
