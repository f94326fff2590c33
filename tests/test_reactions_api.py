def test_save_reaction(client, db, make_user, make_diary, login):
    diary = make_diary(make_user("author"))
    reader = make_user("reader")
    login(reader)

    response = client.post(f"/reactions/{diary['id']}", json={"reaction": "👍"})

    assert response.status_code == 201
    assert response.json()["message"] == "리액션이 저장되었습니다."
    assert [(row["user_id"], row["reaction"]) for row in db.rows("reaction", diary_id=diary["id"])] == [
        (reader["id"], "👍")
    ]


def test_save_reaction_twice(client, make_user, make_diary, login):
    diary = make_diary(make_user("author"))
    login(make_user("reader"))
    client.post(f"/reactions/{diary['id']}", json={"reaction": "👍"})

    response = client.post(f"/reactions/{diary['id']}", json={"reaction": "❤️"})

    assert response.status_code == 400
    assert response.json()["message"] == "이미 리액션을 남긴 일기입니다."


def test_save_reaction_without_body(client, make_user, make_diary, login):
    diary = make_diary(make_user("author"))
    login(make_user("reader"))

    response = client.post(f"/reactions/{diary['id']}", json={})

    assert response.status_code == 400
    assert response.json()["message"] == ["reaction should not be empty"]


def test_save_reaction_on_private_diary(client, make_user, make_diary, login):
    diary = make_diary(make_user("author"), status="private")
    login(make_user("reader"))

    response = client.post(f"/reactions/{diary['id']}", json={"reaction": "👍"})

    assert response.status_code == 403


def test_save_reaction_on_missing_diary(client, make_user, login):
    login(make_user("reader"))

    response = client.post("/reactions/999", json={"reaction": "👍"})

    assert response.status_code == 400
    assert response.json()["message"] == "존재하지 않는 일기입니다."


def test_read_reactions(client, db, make_user, make_diary, login):
    author = make_user("author")
    first = make_user("first", profile_image="http://img/first.png")
    second = make_user("second")
    diary = make_diary(author)
    db.seed("reaction", diary_id=diary["id"], user_id=first["id"], reaction="👍")
    db.seed("reaction", diary_id=diary["id"], user_id=second["id"], reaction="😢")
    login(author)

    response = client.get(f"/reactions/{diary['id']}")

    assert response.status_code == 200
    assert response.json() == {
        "reactionList": [
            {"userId": first["id"], "nickname": "first", "profileImage": "http://img/first.png", "reaction": "👍"},
            {"userId": second["id"], "nickname": "second", "profileImage": None, "reaction": "😢"},
        ]
    }


def test_update_reaction(client, db, make_user, make_diary, login):
    diary = make_diary(make_user("author"))
    reader = make_user("reader")
    db.seed("reaction", diary_id=diary["id"], user_id=reader["id"], reaction="👍")
    login(reader)

    response = client.patch(f"/reactions/{diary['id']}", json={"reaction": "🎉"})

    assert response.status_code == 200
    assert response.json()["message"] == "리액션이 수정되었습니다."
    assert db.rows("reaction", diary_id=diary["id"])[0]["reaction"] == "🎉"


def test_update_missing_reaction(client, make_user, make_diary, login):
    diary = make_diary(make_user("author"))
    login(make_user("reader"))

    response = client.patch(f"/reactions/{diary['id']}", json={"reaction": "🎉"})

    assert response.status_code == 400
    assert response.json()["message"] == "리액션 기록이 없습니다."


def test_delete_reaction(client, db, make_user, make_diary, login):
    diary = make_diary(make_user("author"))
    reader = make_user("reader")
    other = make_user("other")
    db.seed("reaction", diary_id=diary["id"], user_id=reader["id"], reaction="👍")
    db.seed("reaction", diary_id=diary["id"], user_id=other["id"], reaction="👍")
    login(reader)

    response = client.delete(f"/reactions/{diary['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "리액션이 삭제되었습니다."
    assert [row["user_id"] for row in db.rows("reaction", diary_id=diary["id"])] == [other["id"]]


def test_delete_missing_reaction(client, make_user, make_diary, login):
    diary = make_diary(make_user("author"))
    login(make_user("reader"))

    response = client.delete(f"/reactions/{diary['id']}")

    assert response.status_code == 400
    assert response.json()["message"] == "리액션 기록이 없습니다."
