class TestFileManager:
    def _create(self, client, name, path="/", type="file", **extra):
        return client.post("/api/files", json={"name": name, "path": path, "type": type, **extra})

    def test_listing_matches_path_exactly(self, user_client, storage):
        alice = storage.get_user_by_username("alice")
        self._create(user_client, "docs", "/", "directory")
        self._create(user_client, "readme.txt", "/docs", size=12)
        self._create(user_client, "old.txt", "/docs/old")
        self._create(user_client, "other.txt", "/documents")

        listing = user_client.get(f"/api/files/user/{alice.id}", params={"path": "/docs"}).json()
        assert [e["name"] for e in listing] == ["readme.txt"]
        assert listing[0]["mimeType"] == "text/plain"

        root = user_client.get(f"/api/files/user/{alice.id}").json()
        assert [(e["name"], e["type"]) for e in root] == [("docs", "directory")]

    def test_path_must_be_absolute(self, user_client):
        assert self._create(user_client, "a.txt", "docs").status_code == 400
        assert self._create(user_client, "a/b.txt", "/").status_code == 400

    def test_duplicate_name_in_same_directory(self, user_client):
        assert self._create(user_client, "a.txt").status_code == 201
        assert self._create(user_client, "a.txt").status_code == 400
        assert self._create(user_client, "a.txt", "/other").status_code == 201

    def test_delete_is_not_recursive(self, user_client, storage):
        alice = storage.get_user_by_username("alice")
        folder = self._create(user_client, "site", "/", "directory").json()
        self._create(user_client, "index.html", "/site")

        assert user_client.delete(f"/api/files/{folder['id']}").status_code == 200
        assert len(user_client.get(f"/api/files/user/{alice.id}", params={"path": "/site"}).json()) == 1

    def test_upload_stores_metadata(self, user_client, storage):
        alice = storage.get_user_by_username("alice")
        response = user_client.post(
            "/api/files/upload",
            data={"path": "/uploads"},
            files=[
                ("files", ("a.txt", b"hello", "text/plain")),
                ("files", ("b.png", b"\x89PNG....", "image/png")),
            ],
        )
        assert response.status_code == 201
        assert [(e["name"], e["size"]) for e in response.json()] == [("a.txt", 5), ("b.png", 8)]

        listing = user_client.get(f"/api/files/user/{alice.id}", params={"path": "/uploads"}).json()
        assert {e["mimeType"] for e in listing} == {"text/plain", "image/png"}

    def test_rename_and_move(self, user_client):
        entry = self._create(user_client, "a.txt").json()
        moved = user_client.put(f"/api/files/{entry['id']}", json={"name": "b.txt", "path": "/archive"})
        assert moved.status_code == 200
        assert (moved.json()["name"], moved.json()["path"]) == ("b.txt", "/archive")

    def test_versions_newest_first(self, user_client, clock):
        entry = self._create(user_client, "app.py").json()
        user_client.post(f"/api/files/{entry['id']}/versions", json={"content": "print(1)", "comment": "first"})
        clock.advance(minutes=1)
        user_client.post(f"/api/files/{entry['id']}/versions", json={"content": "print(22)"})

        versions = user_client.get(f"/api/files/{entry['id']}/versions").json()
        assert [v["version"] for v in versions] == [2, 1]
        assert versions[0]["size"] == 9
        assert len(versions[0]["checksum"]) == 64
        assert user_client.get(f"/api/files/{entry['id']}").json()["size"] == 9

    def test_other_users_files_are_hidden(self, user_client, other_client, storage):
        alice = storage.get_user_by_username("alice")
        entry = self._create(user_client, "secret.txt").json()

        assert other_client.get(f"/api/files/user/{alice.id}").status_code == 404
        assert other_client.get(f"/api/files/{entry['id']}").status_code == 404
