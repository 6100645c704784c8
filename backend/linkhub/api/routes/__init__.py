from linkhub.api.routes import imports

__all__ = [
    'imports',
]
