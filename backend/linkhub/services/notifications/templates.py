from collections.abc import Sequence

from linkhub.services.links import link_constructor_simple


def render_links_imported_email(
    provider: str,
    count: int,
    links: Sequence,
    domains: Sequence[str],
    workspace_name: str,
    workspace_slug: str,
) -> tuple[str, str]:
    subject = f'Your {provider} links have been imported!'

    lines = [
        f'Your {count} {provider} link{"" if count == 1 else "s"} for {", ".join(domains)} '
        f'have been imported into your Linkhub workspace, {workspace_name}.',
        '',
    ]
    if links:
        lines.append('Here are some of the most recently imported links:')
        lines.extend(f'  - {link_constructor_simple(link.domain, link.key)}' for link in links)
        lines.append('')
    lines.append(f'View all your imported links: https://app.linkhub.app/{workspace_slug}')
    return subject, '\n'.join(lines)
