from society.models import Chat, ChatMember, ChatMessage, Notification
from society.models.role import Role


def add_chat(db, site, *users, messages=()):
    chat = Chat(
        site_id=site.id,
        members=[ChatMember(user_id=user.id) for user in users],
        messages=[ChatMessage(sender_id=sender.id, content=content) for sender, content in messages],
    )
    db.add(chat)
    db.commit()
    db.refresh(chat)
    return chat


class TestOpenChat:
    """POST /api/community/chats"""

    def test_creates_direct_chat(self, client, db_session, resident_headers, resident, admin):
        response = client.post(
            "/api/community/chats", headers=resident_headers, json={"member_id": admin.id}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["is_group"] is False
        assert {m["id"] for m in data["members"]} == {resident.id, admin.id}
        assert db_session.query(Chat).count() == 1

    def test_reuses_existing_chat(
        self, client, db_session, resident_headers, admin_headers, resident, admin
    ):
        """Either side opening the chat again gets the same one"""
        first = client.post(
            "/api/community/chats", headers=resident_headers, json={"member_id": admin.id}
        )
        second = client.post(
            "/api/community/chats", headers=admin_headers, json={"member_id": resident.id}
        )

        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert db_session.query(Chat).count() == 1

    def test_cannot_chat_with_yourself(self, client, resident_headers, resident):
        response = client.post(
            "/api/community/chats", headers=resident_headers, json={"member_id": resident.id}
        )

        assert response.status_code == 400

    def test_member_of_other_site_not_found(self, client, db_session, resident_headers, other_resident):
        """Chats never cross sites"""
        response = client.post(
            "/api/community/chats", headers=resident_headers, json={"member_id": other_resident.id}
        )

        assert response.status_code == 404
        assert db_session.query(Chat).count() == 0


class TestListChats:
    """GET /api/community/chats"""

    def test_only_own_chats(
        self, client, db_session, resident_headers, resident, admin, site, user_factory
    ):
        guard = user_factory(Role.SECURITY, site, email="guard@society.com")
        mine = add_chat(db_session, site, resident, admin)
        add_chat(db_session, site, admin, guard)

        response = client.get("/api/community/chats", headers=resident_headers)

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [mine.id]

    def test_requires_session(self, client):
        assert client.get("/api/community/chats").status_code == 401


class TestGetChat:
    """GET /api/community/chats/{id}"""

    def test_member_reads_messages(self, client, db_session, resident_headers, resident, admin, site):
        chat = add_chat(
            db_session, site, resident, admin, messages=[(resident, "Hi"), (admin, "Hello")]
        )

        response = client.get(f"/api/community/chats/{chat.id}", headers=resident_headers)

        assert response.status_code == 200
        messages = response.json()["messages"]
        assert [m["content"] for m in messages] == ["Hi", "Hello"]
        assert messages[1]["sender_name"] == "Admin User"

    def test_non_member_forbidden(self, client, db_session, resident_headers, admin, site, user_factory):
        """Only members may read a chat"""
        guard = user_factory(Role.SECURITY, site, email="guard@society.com")
        chat = add_chat(db_session, site, admin, guard)

        response = client.get(f"/api/community/chats/{chat.id}", headers=resident_headers)

        assert response.status_code == 403

    def test_other_site_chat_not_found(
        self, client, db_session, resident_headers, other_site, other_resident, other_admin
    ):
        chat = add_chat(db_session, other_site, other_resident, other_admin)

        response = client.get(f"/api/community/chats/{chat.id}", headers=resident_headers)

        assert response.status_code == 404


class TestSendMessage:
    """POST /api/community/chats/{id}/messages"""

    def test_message_notifies_other_members(
        self, client, db_session, resident_headers, resident, admin, site
    ):
        """Everyone but the sender is notified"""
        chat = add_chat(db_session, site, resident, admin)

        response = client.post(
            f"/api/community/chats/{chat.id}/messages",
            headers=resident_headers,
            json={"content": "Is the gym open?"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["sender_id"] == resident.id
        assert data["sender_name"] == "John Resident"
        assert data["message_type"] == "text"

        notifications = db_session.query(Notification).all()
        assert len(notifications) == 1
        assert notifications[0].user_id == admin.id
        assert notifications[0].message == "New message from John Resident"
        assert notifications[0].link == f"/admin/community?view=chat&chat_id={chat.id}"

    def test_message_moves_chat_to_top(
        self, client, db_session, resident_headers, resident, admin, site, user_factory
    ):
        """The most recently active chat is listed first"""
        neighbour = user_factory(Role.RESIDENT, site, email="n@society.com", flat_number="A-102")
        older = add_chat(db_session, site, resident, admin)
        newer = add_chat(db_session, site, resident, neighbour)

        client.post(
            f"/api/community/chats/{older.id}/messages",
            headers=resident_headers,
            json={"content": "Bump"},
        )
        response = client.get("/api/community/chats", headers=resident_headers)

        assert [c["id"] for c in response.json()] == [older.id, newer.id]

    def test_non_member_cannot_post(
        self, client, db_session, resident_headers, admin, site, user_factory
    ):
        guard = user_factory(Role.SECURITY, site, email="guard@society.com")
        chat = add_chat(db_session, site, admin, guard)

        response = client.post(
            f"/api/community/chats/{chat.id}/messages",
            headers=resident_headers,
            json={"content": "Let me in"},
        )

        assert response.status_code == 403
        assert db_session.query(ChatMessage).count() == 0
        assert db_session.query(Notification).count() == 0

    def test_empty_message_rejected(self, client, db_session, resident_headers, resident, admin, site):
        chat = add_chat(db_session, site, resident, admin)

        response = client.post(
            f"/api/community/chats/{chat.id}/messages", headers=resident_headers, json={"content": ""}
        )

        assert response.status_code == 422
