"""
StoreGate API - Service Layer Unit Tests
=========================================

What:  Tests for the state held on app.state: response cache, rate limiters,
       repositories, credential verification, permissions and translations.
How:   Services are exercised directly, without HTTP.

Test Strategy:
    ✅ Cache lookup/store/invalidate semantics (exact keys, no-op invalidation)
    ✅ Fixed window counting per client and per limiter
    ✅ Sequential ids and append-only collections
    ✅ Token/credential checks are exact
    ✅ Language resolution from Accept-Language
"""

import math
import time

import pytest

from app.i18n import TRANSLATIONS, Translator, resolve_language
from app.models.product import SEED_PRODUCTS, Product, parse_price_filter
from app.models.user import SEED_USERS, User
from app.services.auth import (
    ADMIN_PRINCIPAL,
    Permission,
    PermissionTable,
    Principal,
    Role,
    StaticCredentialVerifier,
)
from app.services.rate_limiter import FixedWindowLimiter
from app.services.repository import InMemoryRepository
from app.services.response_cache import ResponseCache


class TestResponseCache:
    """Tests for the exact-URL response cache."""

    def setup_method(self):
        self.cache = ResponseCache()

    def test_lookup_missing_key(self):
        assert self.cache.lookup("/api/usuarios") is None

    def test_store_then_lookup(self):
        self.cache.store("/api/usuarios", b'{"total":3}')
        assert self.cache.lookup("/api/usuarios") == b'{"total":3}'

    def test_store_overwrites(self):
        self.cache.store("/api/usuarios", b"old")
        self.cache.store("/api/usuarios", b"new")
        assert self.cache.lookup("/api/usuarios") == b"new"
        assert len(self.cache) == 1

    def test_query_string_is_a_separate_key(self):
        self.cache.store("/api/productos", b"all")
        self.cache.store("/api/productos?categoria=Accesorios", b"filtered")

        self.cache.invalidate("/api/productos")

        assert "/api/productos" not in self.cache
        assert self.cache.lookup("/api/productos?categoria=Accesorios") == b"filtered"

    def test_invalidate_missing_key_is_noop(self):
        self.cache.invalidate("/nothing")
        assert len(self.cache) == 0

    def test_clear(self):
        self.cache.store("/a", b"1")
        self.cache.store("/b", b"2")
        self.cache.clear()
        assert list(self.cache.keys()) == []


class TestFixedWindowLimiter:
    """Tests for the fixed-window request counter."""

    def test_allows_up_to_max_requests(self):
        limiter = FixedWindowLimiter("test", max_requests=3, window_seconds=60)
        assert [limiter.hit("10.0.0.1") for _ in range(3)] == [True, True, True]
        assert limiter.hit("10.0.0.1") is False

    def test_clients_are_counted_separately(self):
        limiter = FixedWindowLimiter("test", max_requests=1, window_seconds=60)
        assert limiter.hit("10.0.0.1") is True
        assert limiter.hit("10.0.0.2") is True
        assert limiter.hit("10.0.0.1") is False

    def test_limiters_do_not_share_counters(self):
        login = FixedWindowLimiter("login", max_requests=1, window_seconds=60)
        api = FixedWindowLimiter("api", max_requests=1, window_seconds=60)
        assert login.hit("10.0.0.1") is True
        assert api.hit("10.0.0.1") is True

    def test_remaining_decreases(self):
        limiter = FixedWindowLimiter("test", max_requests=5, window_seconds=60)
        limiter.hit("10.0.0.1")
        limiter.hit("10.0.0.1")
        assert limiter.remaining("10.0.0.1") == 3

    def test_retry_after_within_window(self):
        limiter = FixedWindowLimiter("test", max_requests=1, window_seconds=900)
        limiter.hit("10.0.0.1")
        assert 1 <= limiter.retry_after("10.0.0.1") <= 900

    def test_counter_resets_when_window_elapses(self):
        limiter = FixedWindowLimiter("t", max_requests=1, window_seconds=1)
        assert limiter.hit("10.0.0.1") is True
        assert limiter.hit("10.0.0.1") is False

        time.sleep(1.1)

        assert limiter.hit("10.0.0.1") is True

    def test_reset_forgets_counters(self):
        limiter = FixedWindowLimiter("test", max_requests=1, window_seconds=60)
        limiter.hit("10.0.0.1")
        limiter.reset()
        assert limiter.hit("10.0.0.1") is True

    def test_message_key_default(self):
        limiter = FixedWindowLimiter("test", max_requests=1, window_seconds=60)
        assert limiter.message_key == "rateLimit.default"


class TestInMemoryRepository:
    """Tests for the append-only collections."""

    @pytest.mark.asyncio
    async def test_seeded_users(self):
        repo = InMemoryRepository("usuarios", SEED_USERS)
        users = await repo.list()
        assert [u.name for u in users] == ["Ana García", "Carlos López", "María Rodríguez"]
        assert users[2].active is False

    @pytest.mark.asyncio
    async def test_next_id_is_size_plus_one(self):
        repo = InMemoryRepository("productos", SEED_PRODUCTS)
        assert await repo.next_id() == 4

    @pytest.mark.asyncio
    async def test_append_keeps_order(self):
        repo = InMemoryRepository("usuarios", SEED_USERS)
        user = User(id=await repo.next_id(), name="Luis", email="luis@example.com")
        await repo.append(user)

        users = await repo.list()
        assert users[-1].id == 4
        assert len(repo) == 4

    @pytest.mark.asyncio
    async def test_seed_is_not_shared_between_repositories(self):
        first = InMemoryRepository("usuarios", SEED_USERS)
        second = InMemoryRepository("usuarios", SEED_USERS)
        await first.append(User(id=4, name="Luis", email="luis@example.com"))
        assert len(second) == 3
        assert len(SEED_USERS) == 3

    @pytest.mark.asyncio
    async def test_list_returns_a_copy(self):
        repo = InMemoryRepository("usuarios", SEED_USERS)
        items = await repo.list()
        items.clear()
        assert len(await repo.list()) == 3


class TestProductFilters:
    """Tests for Product.matches (listing filters)."""

    def setup_method(self):
        self.mouse = Product(id=2, name="Mouse", price=25, category="Accesorios", stock=20)

    def test_no_filters_match(self):
        assert self.mouse.matches()

    def test_category_is_exact_and_case_sensitive(self):
        assert self.mouse.matches(category="Accesorios")
        assert not self.mouse.matches(category="accesorios")

    def test_price_bounds_are_inclusive(self):
        assert self.mouse.matches(min_price=25, max_price=25)
        assert not self.mouse.matches(min_price=25.01)
        assert not self.mouse.matches(max_price=24.99)

    def test_nan_bound_matches_nothing(self):
        assert not self.mouse.matches(min_price=math.nan)
        assert not self.mouse.matches(max_price=math.nan)

    @pytest.mark.parametrize(
        "raw,expected",
        [(None, None), ("", None), ("25", 25.0), ("19.90", 19.9), ("12abc", 12.0), (" 7", 7.0)],
    )
    def test_parse_price_filter(self, raw, expected):
        assert parse_price_filter(raw) == expected

    def test_parse_price_filter_without_number(self):
        assert math.isnan(parse_price_filter("barato"))

    def test_whole_prices_serialize_as_integers(self):
        assert '"precio":1200,' in SEED_PRODUCTS[0].model_dump_json(by_alias=True)
        fractional = Product(id=9, name="Cable", price=9.5, category="Accesorios")
        assert fractional.model_dump(by_alias=True)["precio"] == 9.5

    def test_serializes_with_wire_names(self):
        data = self.mouse.model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "id": 2,
            "nombre": "Mouse",
            "precio": 25,
            "categoria": "Accesorios",
            "stock": 20,
        }


class TestStaticCredentialVerifier:
    """Tests for login and bearer token checks."""

    def setup_method(self):
        self.verifier = StaticCredentialVerifier(
            email="admin@example.com",
            password="admin123",
            token="mi-token-secreto",
        )

    @pytest.mark.asyncio
    async def test_authenticate_valid(self):
        principal = await self.verifier.authenticate("admin@example.com", "admin123")
        assert principal == ADMIN_PRINCIPAL

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self):
        assert await self.verifier.authenticate("admin@example.com", "wrong") is None

    @pytest.mark.asyncio
    async def test_authenticate_is_case_sensitive(self):
        assert await self.verifier.authenticate("Admin@example.com", "admin123") is None

    @pytest.mark.asyncio
    async def test_issue_token(self):
        assert await self.verifier.issue_token(ADMIN_PRINCIPAL) == "mi-token-secreto"

    @pytest.mark.asyncio
    async def test_verify_token(self):
        assert await self.verifier.verify_token("mi-token-secreto") == ADMIN_PRINCIPAL
        assert await self.verifier.verify_token("mi-token-secreto ") is None
        assert await self.verifier.verify_token("") is None


class TestPermissionTable:
    """Tests for principal → permission lookups."""

    def test_admin_has_every_permission(self):
        table = PermissionTable()
        for permission in Permission:
            assert table.allows(ADMIN_PRINCIPAL, permission)

    def test_unknown_principal_has_none(self):
        table = PermissionTable()
        guest = Principal(id=99, name="Invitado", role=Role.USER)
        assert table.permissions_for(guest) == frozenset()
        assert not table.allows(guest, Permission.READ)

    def test_custom_grants(self):
        table = PermissionTable({1: [Permission.READ]})
        assert table.allows(ADMIN_PRINCIPAL, Permission.READ)
        assert not table.allows(ADMIN_PRINCIPAL, Permission.WRITE)

    def test_permission_wire_values(self):
        assert [p.value for p in Permission] == ["leer", "escribir", "admin"]


class TestTranslations:
    """Tests for language resolution and message lookup."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            (None, "es"),
            ("", "es"),
            ("en", "en"),
            ("en-US,en;q=0.9", "en"),
            ("EN-gb", "en"),
            ("es-MX", "es"),
            ("fr-FR,en;q=0.8", "es"),
        ],
    )
    def test_resolve_language(self, header, expected):
        assert resolve_language(header) == expected

    def test_resolve_language_custom_default(self):
        assert resolve_language("de", default="en") == "en"

    def test_both_catalogs_have_the_same_keys(self):
        assert set(TRANSLATIONS["es"]) == set(TRANSLATIONS["en"])

    def test_translate(self):
        assert Translator("en").t("auth.tokenInvalid") == "Invalid token"
        assert Translator("es").t("auth.tokenInvalid") == "Token inválido"

    def test_unknown_key_is_echoed(self):
        assert Translator("en").translate("no.such.key") == "no.such.key"

    def test_unsupported_language_falls_back(self):
        assert Translator("fr").language == "es"
