from datetime import datetime

import pytest

from society.models import Notification, Visitor, VisitorStatus
from society.models.visitor import BlacklistEntry

VISITOR_PAYLOAD = {
    "name": "Amit Sharma",
    "phone": "+91-9876543210",
    "purpose": "Guest",
    "flat_number": "A-101",
}


def add_visitor(db, site, status, flat_number="A-101") -> Visitor:
    visitor = Visitor(
        site_id=site.id,
        name="Courier",
        phone="+91-9000000000",
        purpose="Delivery",
        flat_number=flat_number,
        check_in_time=datetime(2024, 7, 24, 14),
        security_name="Gate Guard",
        status=status,
    )
    db.add(visitor)
    db.commit()
    db.refresh(visitor)
    return visitor


class TestCreateVisitor:
    """POST /api/visitors"""

    def test_security_logs_pending_visitor(self, client, security_headers, resident):
        """Gate staff entries start pending"""
        response = client.post("/api/visitors", headers=security_headers, json=VISITOR_PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["security_name"] == "Gate Guard"
        assert data["site_id"] == resident.site_id

    def test_flat_resident_is_notified(self, client, db_session, security_headers, resident):
        """Resident of the visited flat is asked to respond"""
        client.post("/api/visitors", headers=security_headers, json=VISITOR_PAYLOAD)

        note = db_session.query(Notification).filter(Notification.user_id == resident.id).one()
        assert note.message == "Amit Sharma is at the gate. Please approve or reject their entry."
        assert note.link == "/resident"

    def test_resident_pre_approves_for_own_flat(self, client, resident_headers):
        """Resident entries are pre-approved for their flat"""
        payload = {k: v for k, v in VISITOR_PAYLOAD.items() if k != "flat_number"}

        response = client.post("/api/visitors", headers=resident_headers, json=payload)

        assert response.status_code == 201
        assert response.json()["status"] == "pre-approved"
        assert response.json()["flat_number"] == "A-101"

    def test_resident_cannot_pre_approve_for_other_flat(self, client, resident_headers):
        """Residents cannot pre-approve for another flat"""
        payload = dict(VISITOR_PAYLOAD, flat_number="B-999")

        response = client.post("/api/visitors", headers=resident_headers, json=payload)

        assert response.status_code == 403

    def test_staff_must_name_flat(self, client, security_headers):
        """Gate staff must say which flat is visited"""
        payload = {k: v for k, v in VISITOR_PAYLOAD.items() if k != "flat_number"}

        response = client.post("/api/visitors", headers=security_headers, json=payload)

        assert response.status_code == 400

    def test_blacklisted_phone_refused(self, client, db_session, security_headers, site):
        """Blacklisted phone numbers are turned away"""
        db_session.add(BlacklistEntry(site_id=site.id, phone=VISITOR_PAYLOAD["phone"], reason="Theft"))
        db_session.commit()

        response = client.post("/api/visitors", headers=security_headers, json=VISITOR_PAYLOAD)

        assert response.status_code == 403
        assert response.json()["detail"] == (
            "Visitor with phone number +91-9876543210 is blacklisted."
        )
        assert db_session.query(Visitor).count() == 0

    def test_blacklist_of_other_site_does_not_apply(
        self, client, db_session, security_headers, other_site
    ):
        """Blacklists are per site"""
        db_session.add(BlacklistEntry(site_id=other_site.id, phone=VISITOR_PAYLOAD["phone"]))
        db_session.commit()

        response = client.post("/api/visitors", headers=security_headers, json=VISITOR_PAYLOAD)

        assert response.status_code == 201

    def test_admin_cannot_log_visitors(self, client, admin_headers):
        response = client.post("/api/visitors", headers=admin_headers, json=VISITOR_PAYLOAD)
        assert response.status_code == 403


class TestRespondToVisitor:
    """PUT /api/visitors/{id}/approve and /reject"""

    def test_resident_approves(self, client, db_session, resident_headers, resident, site):
        """Resident approval records who approved"""
        visitor = add_visitor(db_session, site, VisitorStatus.PENDING)

        response = client.put(f"/api/visitors/{visitor.id}/approve", headers=resident_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert response.json()["approved_by"] == resident.id

    def test_resident_rejects(self, client, db_session, resident_headers, site):
        visitor = add_visitor(db_session, site, VisitorStatus.PENDING)

        response = client.put(f"/api/visitors/{visitor.id}/reject", headers=resident_headers)

        assert response.json()["status"] == "rejected"

    def test_cannot_respond_for_other_flat(self, client, db_session, resident_headers, site):
        """Residents cannot decide for another flat"""
        visitor = add_visitor(db_session, site, VisitorStatus.PENDING, flat_number="C-303")

        response = client.put(f"/api/visitors/{visitor.id}/approve", headers=resident_headers)

        assert response.status_code == 403

    def test_unknown_visitor(self, client, resident_headers):
        response = client.put("/api/visitors/999/approve", headers=resident_headers)
        assert response.status_code == 404


class TestCheckInOut:
    @pytest.mark.parametrize("status", [VisitorStatus.APPROVED, VisitorStatus.PRE_APPROVED])
    def test_check_in_allowed(self, client, db_session, security_headers, site, status):
        """Approved and pre-approved visitors can check in"""
        visitor = add_visitor(db_session, site, status)

        response = client.put(f"/api/visitors/{visitor.id}/checkin", headers=security_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "checked-in"

    @pytest.mark.parametrize(
        "status", [VisitorStatus.PENDING, VisitorStatus.REJECTED, VisitorStatus.CHECKED_OUT]
    )
    def test_check_in_refused(self, client, db_session, receptionist_headers, site, status):
        """Other statuses cannot check in"""
        visitor = add_visitor(db_session, site, status)

        response = client.put(f"/api/visitors/{visitor.id}/checkin", headers=receptionist_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Visitor not approved for check-in."

    def test_check_out_sets_time(self, client, db_session, security_headers, site):
        """Checkout records the time"""
        visitor = add_visitor(db_session, site, VisitorStatus.CHECKED_IN)

        response = client.put(f"/api/visitors/{visitor.id}/checkout", headers=security_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "checked-out"
        assert response.json()["check_out_time"] is not None

    def test_check_out_requires_checked_in(self, client, db_session, security_headers, site):
        """Only checked-in visitors can check out"""
        visitor = add_visitor(db_session, site, VisitorStatus.APPROVED)

        response = client.put(f"/api/visitors/{visitor.id}/checkout", headers=security_headers)

        assert response.status_code == 400

    def test_resident_cannot_check_in(self, client, db_session, resident_headers, site):
        visitor = add_visitor(db_session, site, VisitorStatus.APPROVED)

        response = client.put(f"/api/visitors/{visitor.id}/checkin", headers=resident_headers)

        assert response.status_code == 403


class TestVisitorLists:
    def test_site_log_is_scoped(self, client, db_session, admin_headers, site, other_site):
        """Visitor log shows the caller's site only"""
        add_visitor(db_session, site, VisitorStatus.PENDING)
        add_visitor(db_session, other_site, VisitorStatus.PENDING, flat_number="B-205")

        response = client.get("/api/visitors", headers=admin_headers)

        assert response.status_code == 200
        assert [v["flat_number"] for v in response.json()] == ["A-101"]

    def test_resident_sees_own_flat(self, client, db_session, resident_headers, site):
        """Residents see visitors of their flat only"""
        add_visitor(db_session, site, VisitorStatus.PENDING)
        add_visitor(db_session, site, VisitorStatus.PENDING, flat_number="C-303")

        response = client.get("/api/resident/visitors", headers=resident_headers)

        assert [v["flat_number"] for v in response.json()] == ["A-101"]


class TestBlacklist:
    """/api/visitors/blacklist"""

    def test_add_and_list(self, client, admin_headers):
        """Blacklisted numbers are listed"""
        response = client.post(
            "/api/visitors/blacklist",
            headers=admin_headers,
            json={"phone": "+91-9111111111", "reason": "Harassment"},
        )
        assert response.status_code == 201

        listed = client.get("/api/visitors/blacklist", headers=admin_headers).json()
        assert [e["phone"] for e in listed] == ["+91-9111111111"]

    def test_duplicate_phone_conflicts(self, client, security_headers):
        """Same phone cannot be blacklisted twice"""
        payload = {"phone": "+91-9111111111"}
        client.post("/api/visitors/blacklist", headers=security_headers, json=payload)

        response = client.post("/api/visitors/blacklist", headers=security_headers, json=payload)

        assert response.status_code == 409

    def test_remove_entry(self, client, db_session, admin_headers, site):
        entry = BlacklistEntry(site_id=site.id, phone="+91-9111111111")
        db_session.add(entry)
        db_session.commit()

        response = client.delete(f"/api/visitors/blacklist/{entry.id}", headers=admin_headers)

        assert response.status_code == 204
        assert db_session.query(BlacklistEntry).count() == 0

    def test_cannot_remove_other_site_entry(self, client, db_session, admin_headers, other_site):
        """Entries of another site cannot be removed"""
        entry = BlacklistEntry(site_id=other_site.id, phone="+91-9111111111")
        db_session.add(entry)
        db_session.commit()

        response = client.delete(f"/api/visitors/blacklist/{entry.id}", headers=admin_headers)

        assert response.status_code == 404

    def test_receptionist_cannot_manage(self, client, receptionist_headers):
        response = client.get("/api/visitors/blacklist", headers=receptionist_headers)
        assert response.status_code == 403
