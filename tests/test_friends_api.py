import pytest


@pytest.fixture
def pair(make_user):
    return make_user("alice"), make_user("bob")


def _relations(db):
    return [(row["sender_id"], row["receiver_id"], row["status"]) for row in db.tables["friend"]]


# 신청
def test_send_request(client, db, pair, login):
    alice, bob = pair
    login(alice)

    response = client.post(f"/friends/request/{bob['id']}")

    assert response.status_code == 201
    assert response.json()["message"] == "친구신청이 완료되었습니다."
    assert _relations(db) == [(alice["id"], bob["id"], "pending")]


def test_send_request_to_self(client, pair, login):
    alice, _ = pair
    login(alice)

    response = client.post(f"/friends/request/{alice['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "나에게 친구신청 보낼 수 없습니다."


def test_send_request_to_missing_user(client, pair, login):
    login(pair[0])

    response = client.post("/friends/request/999")

    assert response.status_code == 400
    assert response.json()["message"] == "존재하지 않는 사용자입니다."


def test_send_request_twice(client, pair, login):
    alice, bob = pair
    login(alice)
    client.post(f"/friends/request/{bob['id']}")

    response = client.post(f"/friends/request/{bob['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "이미 친구신청을 하셨습니다."


def test_send_request_when_already_received(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=bob["id"], receiver_id=alice["id"], status="pending")
    login(alice)

    response = client.post(f"/friends/request/{bob['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "상대의 친구신청을 확인해주세요."


def test_send_request_to_friend(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=bob["id"], receiver_id=alice["id"], status="complete")
    login(alice)

    response = client.post(f"/friends/request/{bob['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "이미 친구인 사용자입니다."


# 취소
def test_cancel_request(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=alice["id"], receiver_id=bob["id"], status="pending")
    login(alice)

    response = client.delete(f"/friends/request/{bob['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "친구신청이 취소되었습니다."
    assert _relations(db) == []


def test_cancel_received_request(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=bob["id"], receiver_id=alice["id"], status="pending")
    login(alice)

    response = client.delete(f"/friends/request/{bob['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "상대의 친구신청을 확인하세요."
    assert len(_relations(db)) == 1


def test_cancel_without_request(client, pair, login):
    alice, bob = pair
    login(alice)

    response = client.delete(f"/friends/request/{bob['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "해당 사용자 사이의 친구신청 기록이 없습니다."


def test_cancel_self(client, pair, login):
    alice, _ = pair
    login(alice)

    response = client.delete(f"/friends/request/{alice['id']}")

    assert response.json()["message"] == "나와는 친구신청 관리를 할 수 없습니다."


# 수락 / 거절
def test_allow_request(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=bob["id"], receiver_id=alice["id"], status="pending")
    login(alice)

    response = client.post(f"/friends/allow/{bob['id']}")

    assert response.status_code == 201
    assert response.json()["message"] == "친구신청을 수락했습니다."
    assert _relations(db) == [(bob["id"], alice["id"], "complete")]


def test_allow_own_sent_request(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=alice["id"], receiver_id=bob["id"], status="pending")
    login(alice)

    response = client.post(f"/friends/allow/{bob['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "해당 사용자 사이의 친구신청 기록이 없습니다."


def test_allow_self(client, pair, login):
    alice, _ = pair
    login(alice)

    response = client.post(f"/friends/allow/{alice['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "나와는 친구신청 관리를 할 수 없습니다."


def test_reject_request(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=bob["id"], receiver_id=alice["id"], status="pending")
    login(alice)

    response = client.delete(f"/friends/allow/{bob['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "친구신청을 거절했습니다."
    assert _relations(db) == []


# 친구 목록 / 삭제
def test_friend_list_in_both_directions(client, db, make_user, login):
    me = make_user("me")
    first = make_user("first")
    second = make_user("second")
    pending = make_user("pending")
    db.seed("friend", sender_id=me["id"], receiver_id=first["id"], status="complete")
    db.seed("friend", sender_id=second["id"], receiver_id=me["id"], status="complete")
    db.seed("friend", sender_id=pending["id"], receiver_id=me["id"], status="pending")
    login(me)

    response = client.get(f"/friends/{me['id']}")

    assert response.status_code == 200
    assert [friend["nickname"] for friend in response.json()["friends"]] == ["first", "second"]


def test_delete_friend(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=bob["id"], receiver_id=alice["id"], status="complete")
    login(alice)

    response = client.delete(f"/friends/{bob['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "친구가 삭제되었습니다."
    assert _relations(db) == []


def test_delete_non_friend(client, db, pair, login):
    alice, bob = pair
    db.seed("friend", sender_id=bob["id"], receiver_id=alice["id"], status="pending")
    login(alice)

    response = client.delete(f"/friends/{bob['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "존재하지 않는 관계입니다."


def test_delete_self(client, pair, login):
    alice, _ = pair
    login(alice)

    response = client.delete(f"/friends/{alice['id']}")

    assert response.json()["message"] == "나와는 친구신청 관리를 할 수 없습니다."


# 신청 목록 / 검색
def test_pending_requests(client, db, make_user, login):
    me = make_user("me")
    sent_to = make_user("sentTo")
    received_from = make_user("receivedFrom")
    db.seed("friend", sender_id=me["id"], receiver_id=sent_to["id"], status="pending")
    db.seed("friend", sender_id=received_from["id"], receiver_id=me["id"], status="pending")
    login(me)

    response = client.get(f"/friends/request/{me['id']}")

    assert response.status_code == 200
    strangers = response.json()["strangers"]
    assert [(stranger["nickname"], stranger["isSender"]) for stranger in strangers] == [
        ("sentTo", True),
        ("receivedFrom", False),
    ]


def test_pending_requests_of_other_user(client, pair, login):
    alice, bob = pair
    login(alice)

    response = client.get(f"/friends/request/{bob['id']}")

    assert response.status_code == 403


def test_search_friends(client, db, make_user, login):
    me = make_user("me")
    db.seed("friend", sender_id=me["id"], receiver_id=make_user("Kim Minji")["id"], status="complete")
    db.seed("friend", sender_id=me["id"], receiver_id=make_user("Lee")["id"], status="complete")
    make_user("kim stranger")
    login(me)

    response = client.get("/friends/search/kim")

    assert response.status_code == 200
    assert [friend["nickname"] for friend in response.json()] == ["Kim Minji"]
