import asyncio
import json
import threading

import httpx
from fastapi.concurrency import run_in_threadpool

from utils.mailer import HttpMailer
from models.email import EmailLog


def test_email_routes_require_admin(client, user_headers):
    assert client.get("/api/email/templates").status_code == 401
    assert client.get("/api/email/templates", headers=user_headers).status_code == 403
    assert client.post("/api/email/send", json={}, headers=user_headers).status_code == 403
    assert client.get("/api/email/logs", headers=user_headers).status_code == 403


def test_template_crud(client, admin_headers):
    resp = client.post("/api/email/templates", headers=admin_headers, json={
        "name": "Promo", "subject": "Deals for {firstName}", "body": "Hi {firstName}",
    })
    assert resp.status_code == 201
    template = resp.json()["template"]
    assert template["isActive"] is True

    resp = client.put(f"/api/email/templates/{template['id']}", headers=admin_headers, json={"subject": "New deals"})
    assert resp.json()["template"]["subject"] == "New deals"
    assert resp.json()["template"]["body"] == "Hi {firstName}"

    names = [t["name"] for t in client.get("/api/email/templates", headers=admin_headers).json()["templates"]]
    assert names == ["Promo"]

    assert client.delete(f"/api/email/templates/{template['id']}", headers=admin_headers).status_code == 200
    resp = client.delete(f"/api/email/templates/{template['id']}", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Template not found"}


def test_send_to_users_and_custom_addresses(client, db, admin_headers, make_user, mailer):
    ann = make_user(email="ann@example.com", first_name="Ann", company="Ann Corp")
    ben = make_user(email="ben@example.com", first_name="Ben")

    resp = client.post("/api/email/send", headers=admin_headers, json={
        "userIds": [ann.id, ben.id, ann.id],
        "customEmails": ["buyer@partner.org"],
        "subject": "Hello {firstName}",
        "body": "Dear {firstName} at {company}",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Email sent to 3 recipient(s)"
    assert body["stats"] == {"total": 3, "successful": 3, "failed": 0}

    by_address = {m["to"]: m for m in mailer.sent}
    assert by_address["ann@example.com"]["subject"] == "Hello Ann"
    assert by_address["ann@example.com"]["body"] == "Dear Ann at Ann Corp"
    assert by_address["ben@example.com"]["body"] == "Dear Ben at "
    # Custom addresses get the text unchanged
    assert by_address["buyer@partner.org"]["subject"] == "Hello {firstName}"

    logs = db.query(EmailLog).all()
    assert len(logs) == 1
    assert logs[0].status == "sent"
    assert logs[0].error is None
    assert sorted(logs[0].to) == ["ann@example.com", "ben@example.com", "buyer@partner.org"]


def test_partial_delivery_is_recorded(client, db, admin_headers, mailer):
    mailer.failing.add("bad@partner.org")
    resp = client.post("/api/email/send", headers=admin_headers, json={
        "customEmails": ["good@partner.org", "bad@partner.org"], "subject": "S", "body": "B",
    })
    assert resp.status_code == 200
    assert resp.json()["stats"] == {"total": 2, "successful": 1, "failed": 1}

    log = db.query(EmailLog).one()
    assert log.status == "sent"
    assert log.error == "Partial delivery: bad@partner.org: SMTP connection failed"


def test_total_failure_is_recorded(client, db, admin_headers, mailer):
    mailer.failing.update({"a@partner.org", "b@partner.org"})
    resp = client.post("/api/email/send", headers=admin_headers, json={
        "customEmails": ["a@partner.org", "b@partner.org"], "subject": "S", "body": "B",
    })
    assert resp.json()["stats"]["successful"] == 0

    log = db.query(EmailLog).one()
    assert log.status == "failed"
    assert log.error == "a@partner.org: SMTP connection failed; b@partner.org: SMTP connection failed"


def test_send_validation(client, db, admin_headers, make_user, mailer):
    resp = client.post("/api/email/send", headers=admin_headers, json={"subject": "S", "body": "B"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "At least one recipient is required"

    resp = client.post("/api/email/send", headers=admin_headers,
                       json={"customEmails": ["x@partner.org"], "subject": " ", "body": "B"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Subject and body are required"

    resp = client.post("/api/email/send", headers=admin_headers,
                       json={"customEmails": ["x@partner.org"], "subject": "S", "body": "B", "templateId": 404})
    assert resp.status_code == 404

    inactive = make_user(email="off@example.com", is_active=False)
    resp = client.post("/api/email/send", headers=admin_headers,
                       json={"userIds": [inactive.id, 9999], "subject": "S", "body": "B"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "None of the selected users can receive email"

    resp = client.post("/api/email/send", headers=admin_headers,
                       json={"customEmails": ["not-an-address"], "subject": "S", "body": "B"})
    assert resp.status_code == 400

    assert mailer.sent == []
    assert db.query(EmailLog).count() == 0


def test_logs_include_template_name(client, admin_headers, mailer):
    template = client.post("/api/email/templates", headers=admin_headers, json={
        "name": "Welcome", "subject": "Welcome", "body": "Hello",
    }).json()["template"]
    client.post("/api/email/send", headers=admin_headers, json={
        "customEmails": ["x@partner.org"], "subject": "Welcome", "body": "Hello", "templateId": template["id"],
    })
    client.post("/api/email/send", headers=admin_headers, json={
        "customEmails": ["y@partner.org"], "subject": "Plain", "body": "Text",
    })

    logs = client.get("/api/email/logs", headers=admin_headers).json()["logs"]
    assert len(logs) == 2
    names = {log["subject"]: log["templateName"] for log in logs}
    assert names == {"Welcome": "Welcome", "Plain": None}

    assert len(client.get("/api/email/logs", params={"limit": 1}, headers=admin_headers).json()["logs"]) == 1


def test_email_settings_round_trip(client, admin_headers):
    settings = client.get("/api/email/settings", headers=admin_headers).json()["settings"]
    assert settings["fromEmail"] == "support@industrialco.com"

    resp = client.put("/api/email/settings", headers=admin_headers, json={
        "provider": "api", "fromName": "Sales", "fromEmail": "sales@industrialco.com", "replyTo": None,
    })
    assert resp.status_code == 200
    assert resp.json()["settings"]["fromName"] == "Sales"
    assert client.get("/api/email/settings", headers=admin_headers).json()["settings"]["replyTo"] is None


def test_user_address_repeated_in_custom_emails_is_sent_once(client, db, admin_headers, make_user, mailer):
    carol = make_user(email="carol@example.com", first_name="Carol")
    resp = client.post("/api/email/send", headers=admin_headers, json={
        "userIds": [carol.id],
        "customEmails": ["Carol@example.com", "other@partner.org", "other@partner.org"],
        "subject": "Hi {firstName}",
        "body": "B",
    })
    assert resp.json()["stats"] == {"total": 2, "successful": 2, "failed": 0}
    assert [m["to"] for m in mailer.sent] == ["carol@example.com", "other@partner.org"]
    # The registered copy wins, so the greeting is personalized
    assert mailer.sent[0]["subject"] == "Hi Carol"
    assert db.query(EmailLog).one().to == ["carol@example.com", "other@partner.org"]


def test_send_keeps_database_work_off_the_event_loop(client, admin_headers, mailer, monkeypatch):
    import routes.email as email_routes

    calls = []

    async def tracking_threadpool(func, *args, **kwargs):
        loop_thread = threading.get_ident()

        def wrapped(*a, **kw):
            calls.append((func.__name__, threading.get_ident() != loop_thread))
            return func(*a, **kw)

        return await run_in_threadpool(wrapped, *args, **kwargs)

    monkeypatch.setattr(email_routes, "run_in_threadpool", tracking_threadpool)
    resp = client.post("/api/email/send", headers=admin_headers, json={
        "customEmails": ["x@partner.org"], "subject": "S", "body": "B",
    })
    assert resp.status_code == 200
    assert calls == [("_build_messages", True), ("_record_dispatch", True)]


def test_http_mailer_reuses_one_client():
    requests = []

    def handler(request):
        requests.append((request.headers["Authorization"], json.loads(request.content)))
        return httpx.Response(502 if b"bad@" in request.content else 200)

    async def dispatch():
        mailer = HttpMailer("https://mail.example.com/send", "secret", "noreply@industrialco.com",
                            transport=httpx.MockTransport(handler))
        async with mailer:
            client = mailer._client
            ok = await mailer.send("a@partner.org", "S", "B")
            bad = await mailer.send("bad@partner.org", "S", "B")
            assert mailer._client is client
        return mailer, ok, bad

    mailer, ok, bad = asyncio.run(dispatch())
    assert ok.success is True
    assert bad.success is False
    assert mailer._client is None
    assert [body["to"] for _, body in requests] == ["a@partner.org", "bad@partner.org"]
    assert all(auth == "Bearer secret" for auth, _ in requests)
    assert requests[0][1]["from"] == "noreply@industrialco.com"
