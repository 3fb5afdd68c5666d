"""Unit tests for service wiring and create_service()."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from privacy_guard.config import AppConfig, LoggingConfig
from privacy_guard.exceptions import MalformedTaxonomy, RecordNotFound
from privacy_guard.pdp import Decision, create_default_policy
from privacy_guard.service import PrivacyGuardService, create_service
from privacy_guard.store import RecordStore
from privacy_guard.telemetry.system.system_logger import SYSTEM_LOGGER_NAME
from privacy_guard.utils.logging import setup_stream_logger
from privacy_guard.utils.policy import save_policy


def read_jsonl(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


@pytest.fixture(autouse=True)
def restore_system_logger() -> Iterator[None]:
    """create_service() redirects the system logger to a file; undo it."""
    yield
    setup_stream_logger(SYSTEM_LOGGER_NAME)


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    policy_path = tmp_path / "policy.json"
    save_policy(create_default_policy(), policy_path)
    return AppConfig(
        logging=LoggingConfig(log_dir=str(tmp_path / "logs")),
        service_id="test-service",
        policy_path=str(policy_path),
    )


@pytest.fixture
def service(trees) -> PrivacyGuardService:
    return PrivacyGuardService(RecordStore(), *trees)


def add_records(service: PrivacyGuardService, make_app, make_preference):
    app = service.store.add_app(make_app())
    user = service.store.create_user(
        full_name="Ada",
        preference=make_preference().model_dump(exclude={"user_id"}),
    )
    return app, user


# =============================================================================
# PrivacyGuardService
# =============================================================================


class TestPrivacyGuardService:
    def test_evaluate_by_ids(self, service, make_app, make_preference):
        app, user = add_records(service, make_app, make_preference)

        first = service.evaluate(app.id, user.id)
        second = service.evaluate(app.id, user.id)

        assert first.result is Decision.GRANT
        assert (first.cache_hit, second.cache_hit) == (False, True)

    def test_evaluate_unknown_app(self, service, make_app, make_preference):
        _, user = add_records(service, make_app, make_preference)

        with pytest.raises(RecordNotFound):
            service.evaluate("missing", user.id)

    def test_update_preference_invalidates_and_changes_result(self, service, make_app, make_preference):
        app, user = add_records(service, make_app, make_preference)
        service.evaluate(app.id, user.id)

        service.update_preference(user.id, make_preference(user_id=user.id, allowed_attributes=frozenset()))
        outcome = service.evaluate(app.id, user.id)

        assert outcome.cache_hit is False
        assert outcome.result is Decision.DENY

    def test_cache_stats_and_clear(self, service, make_app, make_preference):
        app, user = add_records(service, make_app, make_preference)
        service.evaluate(app.id, user.id)

        assert service.cache_stats().grant_count == 1
        assert service.clear_cache() == 1
        assert service.cache_stats().total_entries == 0


# =============================================================================
# create_service
# =============================================================================


class TestCreateService:
    def test_builds_from_config(self, config, monkeypatch):
        monkeypatch.delenv("SERVICE_ID", raising=False)

        service = create_service(config)

        assert service.service_id == "test-service"
        assert service.policy_version == "v1"
        assert "gps" in service.attributes
        assert "analytics" in service.purposes

    def test_logs_startup_and_history(self, config):
        create_service(config)

        history = read_jsonl(config.logging.policy_history_path)
        system = read_jsonl(config.logging.system_log_path)
        assert history[-1]["event"] == "policy_loaded"
        assert system[-1]["event"] == "service_started"

    def test_decisions_written_to_audit_log(self, config, make_app, make_preference):
        service = create_service(config)
        app, user = add_records(service, make_app, make_preference)

        service.evaluate(app.id, user.id)

        (event,) = read_jsonl(config.logging.decisions_log_path)
        assert event["event"] == "compliance_decision"
        assert event["decision"] == "grant"
        assert event["policy_version"] == "v1"

    def test_env_overrides_service_id(self, config, monkeypatch):
        monkeypatch.setenv("SERVICE_ID", "edge-7")

        assert create_service(config).service_id == "edge-7"

    def test_malformed_taxonomy_is_fatal(self, config):
        policy_path = Path(config.policy_path)
        data = json.loads(policy_path.read_text())
        data["attributes"].append({"id": "orphan", "name": "Orphan", "parent": "nowhere"})
        policy_path.write_text(json.dumps(data))

        with pytest.raises(MalformedTaxonomy):
            create_service(config)

        history = read_jsonl(config.logging.policy_history_path)
        assert history[-1]["event"] == "policy_validation_failed"
        assert history[-1]["error_type"] == "MalformedTaxonomy"

    def test_missing_policy(self, config):
        Path(config.policy_path).unlink()

        with pytest.raises(FileNotFoundError):
            create_service(config)
