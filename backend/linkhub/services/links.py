ROOT_KEY = '_root'


def link_constructor_simple(domain: str, key: str) -> str:
    if key == ROOT_KEY:
        return f'https://{domain}'
    return f'https://{domain}/{key}'
