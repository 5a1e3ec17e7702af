"""
Tests for protected access to uploaded files.
"""

PNG = b"\x89PNG\r\n\x1a\n stored"


def store(storage, relative, content=PNG):
    path = storage.root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return "/uploads/" + relative


def test_signed_in_user_can_fetch(client, staff_headers, storage):
    url = store(storage, "fingerprint/fp.png")
    response = client.get(url, headers=staff_headers)
    assert response.status_code == 200
    assert response.content == PNG


def test_anonymous_fetch_refused(client, storage):
    url = store(storage, "face.png")
    assert client.get(url).status_code == 401


def test_missing_file_returns_404(client, staff_headers):
    response = client.get("/uploads/nothing.png", headers=staff_headers)
    assert response.status_code == 404


def test_path_traversal_rejected(client, staff_headers, storage):
    (storage.root.parent / "secret.txt").write_text("classified")
    response = client.get("/uploads/..%2Fsecret.txt", headers=staff_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid file path"
