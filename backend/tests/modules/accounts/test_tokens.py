"""Tests for the verification token repository."""

import pytest
from datetime import datetime, timedelta, timezone

from fakes import MemoryDocumentStore
from modules.accounts.models import TokenPurpose
from modules.accounts.tokens import VerificationTokenRepository, generate_token, hash_token
from shared.exceptions import ExternalServiceError

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
DAY = timedelta(hours=24)


@pytest.fixture
def store():
    return MemoryDocumentStore()


@pytest.fixture
def repo(store):
    return VerificationTokenRepository(store, TokenPurpose.EMAIL_VERIFICATION)


def test_generate_token_shape():
    token = generate_token()
    assert len(token) == 64
    int(token, 16)
    assert generate_token() != token


def test_hash_token_is_stable():
    assert hash_token("abc") == hash_token("abc")
    assert hash_token("abc") != hash_token("abd")


class TestVerificationTokenRepository:
    @pytest.mark.asyncio
    async def test_issue_stores_only_hash(self, repo, store):
        token = await repo.issue("u1", "jane@example.com", DAY, NOW)

        doc = store.collections["email_verifications"]["u1"]
        assert doc["token_hash"] == hash_token(token)
        assert token not in doc.values()

    @pytest.mark.asyncio
    async def test_find(self, repo):
        token = await repo.issue("u1", "jane@example.com", DAY, NOW)

        record = await repo.find(token)

        assert record.user_id == "u1"
        assert record.email == "jane@example.com"
        assert record.expires_at == NOW + DAY
        assert not record.is_expired(NOW + DAY - timedelta(seconds=1))
        assert record.is_expired(NOW + DAY)

    @pytest.mark.asyncio
    async def test_find_unknown(self, repo):
        assert await repo.find("nope") is None

    @pytest.mark.asyncio
    async def test_consume_only_once(self, repo):
        token = await repo.issue("u1", "jane@example.com", DAY, NOW)
        record = await repo.find(token)

        assert await repo.consume(record) is True
        assert await repo.consume(record) is False
        assert await repo.find(token) is None

    @pytest.mark.asyncio
    async def test_reissue_invalidates_previous(self, repo):
        first = await repo.issue("u1", "jane@example.com", DAY, NOW)
        stale = await repo.find(first)
        second = await repo.issue("u1", "jane@example.com", DAY, NOW)

        assert await repo.find(first) is None
        assert await repo.find(second) is not None
        # A lookup made before the reissue cannot consume the new token.
        assert await repo.consume(stale) is False

    @pytest.mark.asyncio
    async def test_purposes_are_separate(self, store, repo):
        resets = VerificationTokenRepository(store, TokenPurpose.PASSWORD_RESET)
        token = await resets.issue("u1", "jane@example.com", timedelta(hours=1), NOW)

        assert await repo.find(token) is None
        assert await resets.find(token) is not None

    @pytest.mark.asyncio
    async def test_revoke(self, repo):
        token = await repo.issue("u1", "jane@example.com", DAY, NOW)

        assert await repo.revoke("u1") is True
        assert await repo.find(token) is None
        assert await repo.revoke("u1") is False

    @pytest.mark.asyncio
    async def test_restore_after_consume(self, repo):
        token = await repo.issue("u1", "jane@example.com", DAY, NOW)
        record = await repo.find(token)
        await repo.consume(record)

        await repo.restore(record)

        restored = await repo.find(token)
        assert restored.user_id == "u1"
        assert restored.expires_at == NOW + DAY

    @pytest.mark.asyncio
    async def test_restore_never_overwrites_newer_token(self, repo):
        token = await repo.issue("u1", "jane@example.com", DAY, NOW)
        record = await repo.find(token)
        await repo.consume(record)
        newer = await repo.issue("u1", "jane@example.com", DAY, NOW)

        with pytest.raises(ExternalServiceError):
            await repo.restore(record)

        assert await repo.find(token) is None
        assert await repo.find(newer) is not None
