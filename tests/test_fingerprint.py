"""Unit tests for decision cache fingerprints."""

from __future__ import annotations

import pytest

from privacy_guard.pdp.fingerprint import canonical_json, fingerprint, sha256_hex
from privacy_guard.pdp.policy import AppRecord, UserPrivacyPreference
from privacy_guard.utils.validation import validate_sha256_hex


class TestCanonicalJson:
    """Tests for canonical record serialization."""

    def test_sets_are_sorted(self, make_app):
        app = make_app(attributes=frozenset({"ip-address", "gps", "email"}))

        result = canonical_json(app)

        assert '"attributes":["email","gps","ip-address"]' in result

    def test_keys_sorted_and_compact(self, make_app):
        result = canonical_json(make_app())

        assert result.startswith('{"attributes":')
        assert ", " not in result and ": " not in result

    def test_construction_order_does_not_matter(self):
        """Records built from differently ordered inputs serialize identically."""
        a = AppRecord(id="x", attributes=["gps", "email"], purposes=["analytics"], retention_seconds=10)
        b = AppRecord(retention_seconds=10, purposes=["analytics"], attributes=["email", "gps"], id="x")

        assert canonical_json(a) == canonical_json(b)


class TestFingerprint:
    """Tests for fingerprint(app, preference)."""

    def test_is_sha256_hex(self, make_app, make_preference):
        result = fingerprint(make_app(), make_preference())

        valid, normalized = validate_sha256_hex(result)
        assert valid
        assert normalized == result

    def test_deterministic_for_equal_values(self, make_app, make_preference):
        """Value-equal (not identical) inputs give the same fingerprint."""
        first = fingerprint(make_app(), make_preference())
        second = fingerprint(make_app(), make_preference())

        assert first == second

    def test_double_hash_construction(self, make_app, make_preference):
        app, pref = make_app(), make_preference()
        expected = sha256_hex(sha256_hex(canonical_json(app)) + "-" + sha256_hex(canonical_json(pref)))

        assert fingerprint(app, pref) == expected

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": "app-2"},
            {"name": "Other"},
            {"attributes": frozenset({"gps", "email"})},
            {"purposes": frozenset({"research"})},
            {"retention_seconds": 1001},
        ],
    )
    def test_any_app_field_changes_fingerprint(self, make_app, make_preference, overrides):
        pref = make_preference()

        assert fingerprint(make_app(**overrides), pref) != fingerprint(make_app(), pref)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"user_id": "user-2"},
            {"allowed_attributes": frozenset({"gps"})},
            {"excepted_attributes": frozenset({"ip-address"})},
            {"denied_attributes": frozenset({"gps"})},
            {"allowed_purposes": frozenset({"research"})},
            {"excepted_purposes": frozenset({"analytics"})},
            {"denied_purposes": frozenset({"marketing"})},
            {"retention_seconds": 3599},
        ],
    )
    def test_any_preference_field_changes_fingerprint(self, make_app, make_preference, overrides):
        app = make_app()

        assert fingerprint(app, make_preference(**overrides)) != fingerprint(app, make_preference())

    def test_same_id_in_different_list_changes_fingerprint(self, make_app):
        """Moving an id from allowed to denied is a different preference."""
        app = make_app()
        allowed = UserPrivacyPreference(user_id="u", allowed_attributes={"gps"}, retention_seconds=1)
        denied = UserPrivacyPreference(user_id="u", denied_attributes={"gps"}, retention_seconds=1)

        assert fingerprint(app, allowed) != fingerprint(app, denied)

    def test_no_collisions_over_sample(self, make_app, make_preference):
        """Distinct retention values over a large sample never collide."""
        pref = make_preference()

        results = {fingerprint(make_app(retention_seconds=i), pref) for i in range(2000)}

        assert len(results) == 2000
