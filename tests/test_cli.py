import json

import pytest
import requests

from razorpay_payments import cli, sign

SECRET = "whsec_cli"

EVENT = {
    "entity": "event",
    "account_id": "acc_BFQ7uQEaa7j2z7",
    "event": "order.paid",
    "contains": ["order"],
    "payload": {
        "order": {
            "entity": {
                "id": "order_DBJOWzybf0sJbb",
                "entity": "order",
                "amount": 50000,
                "currency": "INR",
                "status": "paid",
                "amount_paid": 50000,
            }
        }
    },
    "created_at": 1567674606,
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in (
        "RAZORPAY_KEY_ID",
        "RAZORPAY_KEY_SECRET",
        "RAZORPAY_BASE_URL",
        "RAZORPAY_API_VERSION",
        "RAZORPAY_USER_AGENT",
        "RAZORPAY_TIMEOUT_SECONDS",
        "RAZORPAY_WEBHOOK_SECRET",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env_file(tmp_path):
    return str(tmp_path / "missing.env")


@pytest.fixture
def body_file(tmp_path):
    path = tmp_path / "event.json"
    path.write_bytes(json.dumps(EVENT).encode("utf-8"))
    return path


def test_webhook_sign_prints_hex_digest(capsys, env_file, body_file):
    code = cli.run_cli(
        ["--env-file", env_file, "webhook-sign", str(body_file), "--secret", SECRET]
    )

    assert code == 0
    assert capsys.readouterr().out.strip() == sign(body_file.read_bytes(), SECRET)


def test_webhook_verify_prints_event(capsys, env_file, body_file):
    signature = sign(body_file.read_bytes(), SECRET)

    code = cli.run_cli(
        [
            "--env-file",
            env_file,
            "--set",
            f"RAZORPAY_WEBHOOK_SECRET={SECRET}",
            "webhook-verify",
            str(body_file),
            "--signature",
            signature,
        ]
    )

    assert code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["event"] == "order.paid"
    assert printed["created_at"] == 1567674606
    assert printed["payload"]["order"]["entity"]["id"] == "order_DBJOWzybf0sJbb"


def test_webhook_verify_rejects_bad_signature(capsys, env_file, body_file):
    code = cli.run_cli(
        [
            "--env-file",
            env_file,
            "webhook-verify",
            str(body_file),
            "--signature",
            "0" * 64,
            "--secret",
            SECRET,
        ]
    )

    assert code == 1
    assert capsys.readouterr().out == ""


def test_webhook_sign_without_secret_fails(env_file, body_file):
    assert cli.run_cli(["--env-file", env_file, "webhook-sign", str(body_file)]) == 1


def test_webhook_sign_missing_body_fails(tmp_path, env_file):
    code = cli.run_cli(
        ["--env-file", env_file, "webhook-sign", str(tmp_path / "nope"), "--secret", SECRET]
    )

    assert code == 1


def test_order_fetch_uses_configured_credentials(monkeypatch, capsys, session, respond, env_file):
    respond(
        {
            "id": "order_DBJOWzybf0sJbb",
            "entity": "order",
            "amount": 50000,
            "currency": "INR",
            "status": "created",
            "notes": [],
            "created_at": 1566986570,
        }
    )
    monkeypatch.setattr(requests, "Session", lambda: session)

    code = cli.run_cli(
        [
            "--env-file",
            env_file,
            "--set",
            "RAZORPAY_KEY_ID=rzp_cli",
            "--set",
            "RAZORPAY_KEY_SECRET=cli_secret",
            "--set",
            "RAZORPAY_BASE_URL=https://api.example.com",
            "order-fetch",
            "order_DBJOWzybf0sJbb",
        ]
    )

    assert code == 0
    args, kwargs = session.request.call_args
    assert args == ("GET", "https://api.example.com/v1/orders/order_DBJOWzybf0sJbb")
    assert kwargs["auth"] == ("rzp_cli", "cli_secret")
    printed = json.loads(capsys.readouterr().out)
    assert printed["id"] == "order_DBJOWzybf0sJbb"
    assert printed["status"] == "created"
    assert printed["amount_due"] == 50000


def test_order_create_sends_notes(monkeypatch, capsys, session, respond, env_file):
    respond(
        {"id": "order_new", "amount": 199, "currency": "INR", "status": "created"}
    )
    monkeypatch.setattr(requests, "Session", lambda: session)

    code = cli.run_cli(
        [
            "--env-file",
            env_file,
            "--set",
            "RAZORPAY_KEY_ID=rzp_cli",
            "--set",
            "RAZORPAY_KEY_SECRET=cli_secret",
            "order-create",
            "--amount",
            "199",
            "--receipt",
            "receipt#10002",
            "--note",
            "name=John Doe",
        ]
    )

    assert code == 0
    _, kwargs = session.request.call_args
    assert kwargs["json"] == {
        "amount": 199,
        "currency": "INR",
        "receipt": "receipt#10002",
        "notes": {"name": "John Doe"},
    }
    assert json.loads(capsys.readouterr().out)["id"] == "order_new"


def test_order_command_without_credentials_fails(env_file):
    assert cli.run_cli(["--env-file", env_file, "order-fetch", "order_1"]) == 1


def test_order_fetch_reports_api_errors(monkeypatch, session, respond, env_file):
    respond(
        {"error": {"code": "BAD_REQUEST_ERROR", "description": "The id provided does not exist"}},
        status_code=400,
    )
    monkeypatch.setattr(requests, "Session", lambda: session)

    code = cli.run_cli(
        [
            "--env-file",
            env_file,
            "--set",
            "RAZORPAY_KEY_ID=rzp_cli",
            "--set",
            "RAZORPAY_KEY_SECRET=cli_secret",
            "order-fetch",
            "order_DBJOWzybf0sJbb",
        ]
    )

    assert code == 1


def test_set_requires_key_value(env_file):
    with pytest.raises(SystemExit):
        cli.run_cli(["--env-file", env_file, "--set", "novalue", "order-fetch", "order_1"])


def test_order_command_closes_session(monkeypatch, session, respond, env_file):
    respond({"id": "order_DBJOWzybf0sJbb", "amount": 50000, "currency": "INR", "status": "created"})
    monkeypatch.setattr(requests, "Session", lambda: session)

    code = cli.run_cli(
        [
            "--env-file",
            env_file,
            "--set",
            "RAZORPAY_KEY_ID=rzp_cli",
            "--set",
            "RAZORPAY_KEY_SECRET=cli_secret",
            "order-fetch",
            "order_DBJOWzybf0sJbb",
        ]
    )

    assert code == 0
    session.close.assert_called_once_with()


def test_order_command_closes_session_on_failure(monkeypatch, session, respond, env_file):
    respond({"error": {"code": "SERVER_ERROR", "description": "Try again"}}, status_code=500)
    monkeypatch.setattr(requests, "Session", lambda: session)

    code = cli.run_cli(
        [
            "--env-file",
            env_file,
            "--set",
            "RAZORPAY_KEY_ID=rzp_cli",
            "--set",
            "RAZORPAY_KEY_SECRET=cli_secret",
            "order-fetch",
            "order_DBJOWzybf0sJbb",
        ]
    )

    assert code == 1
    session.close.assert_called_once_with()
