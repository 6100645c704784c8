import smtplib
import uuid
from datetime import datetime, timezone

import pytest

from linkhub.schemas.imports import BitlinksPage
from linkhub.services.imports.flags import ImportFlagStore
from linkhub.services.imports.importer import BitlyImporter
from linkhub.services.imports.store import SampleLink, WorkspaceImportSummary
from linkhub.services.imports.types import ImportRequest, ImportState

WORKSPACE_ID = uuid.UUID('7f0c4bb0-3d53-4a36-9d0c-2b3f1e1c9a10')
USER_ID = uuid.UUID('2d8f4f61-1b7e-4bd4-8f7a-5a1d3f6c0e22')


class FakeClient:
    def __init__(self, payload: dict):
        self.page = BitlinksPage.model_validate(payload)
        self.calls: list[tuple] = []

    def fetch_links_page(self, group_id, search_after=None, size=None):
        self.calls.append((group_id, search_after, size))
        return self.page


class FakeStore:
    def __init__(self, existing=(), summary=None, fail_on_create=False):
        self.existing = set(existing)
        self.summary = summary
        self.fail_on_create = fail_on_create
        self.lookups: list[list[str]] = []
        self.created: list[list] = []
        self.cleaned_workspaces: list[uuid.UUID] = []

    def find_existing_short_links(self, short_links):
        self.lookups.append(list(short_links))
        return self.existing & set(short_links)

    def bulk_create_links(self, links):
        if self.fail_on_create:
            raise RuntimeError('database is down')
        self.created.append(list(links))
        return len(links)

    def delete_unused_tags(self, workspace_id):
        self.cleaned_workspaces.append(workspace_id)
        return 0

    def get_import_summary(self, workspace_id, domains, limit=5):
        return self.summary


class FakeQueue:
    def __init__(self):
        self.published: list[ImportRequest] = []

    def publish(self, request):
        self.published.append(request)
        return 'task-1'


class FakeFlags:
    def __init__(self):
        self.cleared: list[tuple] = []

    def clear(self, provider, workspace_id):
        self.cleared.append((provider, workspace_id))


class FakeNotifier:
    def __init__(self):
        self.sent: list[dict] = []

    def send(self, to_email, subject, body):
        self.sent.append({'to_email': to_email, 'subject': subject, 'body': body})
        return True


def _summary(owner_email='owner@acme.com') -> WorkspaceImportSummary:
    return WorkspaceImportSummary(
        name='Acme',
        slug='acme',
        owner_email=owner_email,
        links=[SampleLink(domain='short.io', key='abc', created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))],
    )


def _request(**overrides) -> ImportRequest:
    values = {
        'workspace_id': WORKSPACE_ID,
        'user_id': USER_ID,
        'bitly_group': 'Bg1a2b3c',
        'domains': ('short.io',),
        'api_key': 'bitly-token',
        'count': 40,
    }
    values.update(overrides)
    return ImportRequest(**values)


def _page(links: list[dict], search_after: str) -> dict:
    return {'links': links, 'pagination': {'search_after': search_after}}


def _link(link_id='short.io/abc', **overrides) -> dict:
    record = {'id': link_id, 'long_url': 'https://ex.com', 'title': 'Example', 'created_at': '2021-04-08T11:37:10+0000'}
    record.update(overrides)
    return record


def _importer(client, store, queue=None, flags=None, notifier=None, sleeps=None) -> BitlyImporter:
    return BitlyImporter(
        client=client,
        store=store,
        queue=queue or FakeQueue(),
        flags=flags or FakeFlags(),
        notifier=notifier or FakeNotifier(),
        page_size=100,
        page_delay_seconds=0.5,
        sleep=(sleeps.append if sleeps is not None else (lambda _seconds: None)),
    )


def test_last_page_persists_and_finalizes_import():
    client = FakeClient(_page([_link()], search_after=''))
    store = FakeStore(summary=_summary())
    queue, flags, notifier, sleeps = FakeQueue(), FakeFlags(), FakeNotifier(), []

    result = _importer(client, store, queue, flags, notifier, sleeps).run(_request())

    assert client.calls == [('Bg1a2b3c', None, 100)]
    assert [[link.short_link for link in batch] for batch in store.created] == [['https://short.io/abc']]
    assert result.state == ImportState.DONE
    assert result.count == 41
    assert result.imported == 1
    assert result.created == 1
    assert sleeps == [0.5]

    assert queue.published == []
    assert flags.cleared == [('bitly', WORKSPACE_ID)]
    assert store.cleaned_workspaces == [WORKSPACE_ID]
    assert len(notifier.sent) == 1
    email = notifier.sent[0]
    assert email['to_email'] == 'owner@acme.com'
    assert email['subject'] == 'Your Bitly links have been imported!'
    assert '41' in email['body']
    assert 'short.io' in email['body']


def test_page_with_cursor_publishes_continuation():
    client = FakeClient(_page([_link()], search_after='xyz'))
    store = FakeStore(summary=_summary())
    queue, flags, notifier = FakeQueue(), FakeFlags(), FakeNotifier()
    request = _request(search_after='prev', tag_mapping={'a': 'tag-1'})

    result = _importer(client, store, queue, flags, notifier).run(request)

    assert result.state == ImportState.HAS_MORE
    assert result.next_cursor == 'xyz'
    assert len(queue.published) == 1
    continuation = queue.published[0]
    assert continuation.search_after == 'xyz'
    assert continuation.count == 41
    assert continuation.workspace_id == request.workspace_id
    assert continuation.domains == request.domains
    assert continuation.tag_mapping == request.tag_mapping
    assert continuation.api_key == request.api_key

    assert flags.cleared == []
    assert store.cleaned_workspaces == []
    assert notifier.sent == []


def test_only_new_links_are_inserted():
    client = FakeClient(
        _page(
            [_link('short.io/a'), _link('short.io/b'), _link('short.io/c')],
            search_after='next',
        )
    )
    store = FakeStore(existing={'https://short.io/b'})

    result = _importer(client, store).run(_request(count=0))

    assert store.lookups == [['https://short.io/a', 'https://short.io/b', 'https://short.io/c']]
    assert [[link.short_link for link in batch] for batch in store.created] == [['https://short.io/a', 'https://short.io/c']]
    assert result.created == 2
    # the running count covers every importable link, duplicates included
    assert result.count == 3


def test_nothing_is_inserted_when_every_link_exists():
    client = FakeClient(_page([_link('short.io/a')], search_after='next'))
    store = FakeStore(existing={'https://short.io/a'})

    result = _importer(client, store).run(_request())

    assert store.created == []
    assert result.created == 0


def test_empty_page_skips_persistence():
    client = FakeClient(_page([_link('bit.ly/a')], search_after='next'))
    store = FakeStore()

    result = _importer(client, store).run(_request())

    assert store.lookups == []
    assert store.created == []
    assert result.imported == 0
    assert result.skipped == 1
    assert result.count == 40


def test_finalize_without_owner_email_skips_notification():
    client = FakeClient(_page([], search_after=''))
    store = FakeStore(summary=_summary(owner_email=None))
    flags, notifier = FakeFlags(), FakeNotifier()

    result = _importer(client, store, flags=flags, notifier=notifier).run(_request())

    assert result.state == ImportState.DONE
    assert flags.cleared == [('bitly', WORKSPACE_ID)]
    assert notifier.sent == []


def test_persistence_failure_aborts_without_continuation():
    client = FakeClient(_page([_link()], search_after='xyz'))
    store = FakeStore(fail_on_create=True)
    queue, flags = FakeQueue(), FakeFlags()

    with pytest.raises(RuntimeError):
        _importer(client, store, queue, flags).run(_request())

    assert queue.published == []
    assert flags.cleared == []


class FailingNotifier:
    def __init__(self, failures: int):
        self.failures = failures
        self.sent: list[str] = []

    def send(self, to_email, subject, body):
        if self.failures:
            self.failures -= 1
            raise smtplib.SMTPServerDisconnected('connection unexpectedly closed')
        self.sent.append(to_email)
        return True


def test_failed_notification_keeps_import_flags_for_redelivery(fake_redis):
    flags = ImportFlagStore(fake_redis)
    flags.save_api_key('bitly', WORKSPACE_ID, 'bitly-token')
    flags.save_tag_mapping('bitly', WORKSPACE_ID, {'a': 'tag-1'})
    client = FakeClient(_page([_link()], search_after=''))
    store = FakeStore(summary=_summary())
    notifier = FailingNotifier(failures=1)
    importer = _importer(client, store, flags=flags, notifier=notifier)

    with pytest.raises(smtplib.SMTPException):
        importer.run(_request())

    assert flags.get_api_key('bitly', WORKSPACE_ID) == 'bitly-token'
    assert flags.get_tag_mapping('bitly', WORKSPACE_ID) == {'a': 'tag-1'}

    store.existing = {'https://short.io/abc'}
    result = importer.run(_request())

    assert result.state == ImportState.DONE
    assert notifier.sent == ['owner@acme.com']
    assert flags.is_importing('bitly', WORKSPACE_ID) is False
    assert flags.get_tag_mapping('bitly', WORKSPACE_ID) == {}
