def test_me(client, make_user, login):
    me = make_user("me", profile_image="http://img/me.png")
    login(me)

    response = client.get("/users/me")

    assert response.status_code == 200
    body = response.json()
    assert body["userId"] == me["id"]
    assert body["nickname"] == "me"
    assert body["email"] == "me@example.com"
    assert body["profileImage"] == "http://img/me.png"


def test_me_requires_login(client):
    assert client.get("/users/me").status_code == 401


def test_get_user(client, make_user, login):
    other = make_user("other")
    login(make_user("me"))

    response = client.get(f"/users/{other['id']}")

    assert response.status_code == 200
    assert response.json()["nickname"] == "other"


def test_get_missing_user(client, make_user, login):
    login(make_user("me"))

    response = client.get("/users/999")

    assert response.status_code == 400
    assert response.json()["message"] == "존재하지 않는 사용자입니다."


def test_search_users_with_relation(client, db, make_user, login):
    me = make_user("diary-me")
    friend = make_user("diary-friend")
    pending = make_user("diary-pending")
    make_user("diary-stranger")
    make_user("other")
    db.seed("friend", sender_id=me["id"], receiver_id=friend["id"], status="complete")
    db.seed("friend", sender_id=pending["id"], receiver_id=me["id"], status="pending")
    login(me)

    response = client.get("/users/search/DIARY")

    assert response.status_code == 200
    assert [(user["nickname"], user["relation"]) for user in response.json()] == [
        ("diary-friend", "complete"),
        ("diary-pending", "pending"),
        ("diary-stranger", "none"),
    ]


def test_search_users_treats_wildcards_literally(client, make_user, login):
    login(make_user("me"))
    make_user("kim_99")
    make_user("kimX99")
    make_user("100%")
    make_user("1000")

    underscore = client.get("/users/search/m_9").json()
    percent = client.get("/users/search/100%25").json()

    assert [user["nickname"] for user in underscore] == ["kim_99"]
    assert [user["nickname"] for user in percent] == ["100%"]
