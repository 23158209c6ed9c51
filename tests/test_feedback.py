"""
Feedback thread on a thesis
"""
from conftest import add_thesis


def test_teacher_adds_feedback(client, teacher, approved_thesis):
    response = client.post(
        f"/thesis/{approved_thesis['id']}/feedbacks",
        json={"content": "Good start"},
        headers=teacher["headers"],
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Feedback submitted successfully"
    assert body["feedback"]["content"] == "Good start"
    assert body["feedback"]["thesisId"] == approved_thesis["id"]
    assert body["feedback"]["userId"] == teacher["id"]
    assert body["feedback"]["createdAt"]


def test_empty_content_rejected(client, teacher, approved_thesis):
    for payload in ({}, {"content": ""}, {"content": "   "}):
        response = client.post(
            f"/thesis/{approved_thesis['id']}/feedbacks",
            json=payload,
            headers=teacher["headers"],
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Feedback content is required"}


def test_feedback_on_unknown_thesis_is_404(client, teacher):
    response = client.post("/thesis/8/feedbacks", json={"content": "hi"}, headers=teacher["headers"])
    assert response.status_code == 404


def test_feedback_listed_in_insertion_order_with_author(client, teacher, student, approved_thesis):
    url = f"/thesis/{approved_thesis['id']}/feedbacks"
    for content in ("first", "second", "third"):
        client.post(url, json={"content": content}, headers=teacher["headers"])

    response = client.get(url, headers=student["headers"])

    assert response.status_code == 200
    feedbacks = response.json()
    assert [f["content"] for f in feedbacks] == ["first", "second", "third"]
    assert all(f["author"] == {"username": "alice"} for f in feedbacks)


def test_feedback_is_per_thesis(client, teacher, student, approved_thesis):
    other = add_thesis(client, teacher, title="T2")
    client.post(f"/thesis/{approved_thesis['id']}/feedbacks", json={"content": "a"}, headers=teacher["headers"])

    assert client.get(f"/thesis/{other['id']}/feedbacks", headers=student["headers"]).json() == []


def test_student_dashboard_includes_feedback(client, teacher, student, approved_thesis):
    client.post(f"/thesis/{approved_thesis['id']}/feedbacks", json={"content": "a"}, headers=teacher["headers"])

    theses = client.get("/thesis/student", headers=student["headers"]).json()

    assert theses[0]["feedbacks"][0]["content"] == "a"
    assert theses[0]["feedbacks"][0]["author"]["username"] == "alice"
    assert len(theses[0]["subtasks"]) == 2
