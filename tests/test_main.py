"""Tests for the command line entry point."""
import json
import logging

import pytest

import main
from ovirtapi.exceptions import OvirtActionError

from conftest import ENGINE_URL, PASSWORD, USERNAME


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def ovirt_env(monkeypatch):
    monkeypatch.setenv("OVIRT_URL", ENGINE_URL)
    monkeypatch.setenv("OVIRT_USERNAME", USERNAME)
    monkeypatch.setenv("OVIRT_PASSWORD", PASSWORD)
    monkeypatch.delenv("OVIRT_CA_FILE", raising=False)


def parse(*argv):
    return main.build_parser().parse_args(list(argv))


def test_info_returns_product_info(api):
    assert main.run_command(api, parse("info"))["version"]["full_version"] == "4.5.4"


def test_list_serializes_resources(engine, api):
    engine.add("vms", {"name": "web01"})
    engine.add("vms", {"name": "web02"})

    result = main.run_command(api, parse("list", "vms", "--search", "name=web*", "--max", "5"))

    assert [item["name"] for item in result] == ["web01", "web02"]
    assert engine.calls[-1]["params"] == {"search": "name=web*", "max": 5}


def test_show_returns_declared_fields(engine, api):
    doc = engine.add("hosts", {"name": "host1", "address": "10.0.0.5", "unknown": "x"})
    result = main.run_command(api, parse("show", "hosts", doc["id"]))
    assert result["address"] == "10.0.0.5"
    assert "unknown" not in result


def test_delete_removes_resource(engine, api):
    doc = engine.add("datacenters", {"name": "dc1"})
    result = main.run_command(api, parse("delete", "datacenters", doc["id"], "--async"))
    assert result == {"deleted": doc["id"]}
    assert engine.calls[-1]["params"] == {"async": "true"}
    assert doc["href"] not in engine.docs


def test_action_posts_to_resource(engine, api):
    doc = engine.add("vms", {"name": "web01"})
    result = main.run_command(api, parse("action", "vms", doc["id"], "shutdown"))
    assert result == {"status": "complete"}
    assert engine.calls[-1]["url"].endswith(f"{doc['href']}/shutdown")


def test_failed_action_propagates(engine, api):
    doc = engine.add("vms", {"name": "web01"})
    engine.failing_actions.add("start")
    with pytest.raises(OvirtActionError):
        main.run_command(api, parse("action", "vms", doc["id"], "start"))


def test_unknown_collection_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        parse("list", "widgets")


def test_connect_requires_url():
    with pytest.raises(ValueError, match="OVIRT_URL"):
        main.connect({"OVIRT": {"URL": "", "USERNAME": USERNAME, "PASSWORD": PASSWORD}})


def test_connect_requires_credentials():
    with pytest.raises(ValueError, match="credentials"):
        main.connect({"OVIRT": {"URL": ENGINE_URL, "USERNAME": USERNAME, "PASSWORD": ""}})


def test_connect_passes_transport_settings(engine):
    api = main.connect(
        {
            "OVIRT": {
                "URL": ENGINE_URL,
                "USERNAME": USERNAME,
                "PASSWORD": PASSWORD,
                "VERIFY_SSL": False,
                "CA_FILE": None,
                "TIMEOUT": 7,
                "DEBUG_TRANSPORT": True,
            }
        }
    )
    assert api.verify_ssl is False
    assert api.timeout == 7
    assert api.debug is True


def test_main_prints_json_and_writes_logs(engine, ovirt_env, tmp_path, capsys, restore_root_logger):
    exit_code = main.main(["--logs-dir", str(tmp_path), "info"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["version"]["full_version"] == "4.5.4"
    assert (tmp_path / "info.log").exists()
    assert engine.closed is True


def test_main_reports_connection_failure(engine, ovirt_env, monkeypatch, tmp_path, restore_root_logger):
    monkeypatch.setenv("OVIRT_PASSWORD", "wrong")
    assert main.main(["--logs-dir", str(tmp_path), "info"]) == 1


def test_main_reports_missing_config(engine, monkeypatch, tmp_path, restore_root_logger):
    monkeypatch.delenv("OVIRT_URL", raising=False)
    assert main.main(["--logs-dir", str(tmp_path), "info"]) == 1


def test_main_reports_command_failure(engine, ovirt_env, tmp_path, capsys, restore_root_logger):
    assert main.main(["--logs-dir", str(tmp_path), "show", "vms", "missing"]) == 1
    assert capsys.readouterr().out == ""
