class TestDomainsAndDns:
    def test_domain_then_record_end_to_end(self, admin_client):
        domain = admin_client.post("/api/domains", json={"domain": "example.com", "type": "primary", "userId": 1})
        assert domain.status_code == 201
        domain_id = domain.json()["id"]

        record = admin_client.post(
            "/api/dns-records",
            json={"domainId": domain_id, "name": "www", "type": "A", "value": "1.2.3.4", "ttl": 3600},
        )
        assert record.status_code == 201

        records = admin_client.get(f"/api/dns-records/{domain_id}").json()
        assert len(records) == 1
        assert records[0]["name"] == "www"
        assert records[0]["value"] == "1.2.3.4"
        assert records[0]["status"] == "active"
        assert records[0]["userId"] == 1

    def test_domain_is_normalized_and_unique(self, admin_client):
        first = admin_client.post("/api/domains", json={"domain": "Example.COM.", "type": "primary"})
        assert first.json()["domain"] == "example.com"

        again = admin_client.post("/api/domains", json={"domain": "example.com", "type": "addon"})
        assert again.status_code == 400
        assert again.json()["code"] == "ConflictError"

    def test_invalid_domain_and_type(self, admin_client):
        assert admin_client.post("/api/domains", json={"domain": "not a domain", "type": "primary"}).status_code == 400
        assert admin_client.post("/api/domains", json={"domain": "ok.com", "type": "weird"}).status_code == 400

    def test_priority_only_for_mx(self, admin_client):
        domain_id = admin_client.post("/api/domains", json={"domain": "mail.com", "type": "primary"}).json()["id"]

        bad = admin_client.post(
            "/api/dns-records",
            json={"domainId": domain_id, "name": "@", "type": "A", "value": "1.2.3.4", "priority": 10},
        )
        assert bad.status_code == 400

        mx = admin_client.post(
            "/api/dns-records",
            json={"domainId": domain_id, "name": "@", "type": "MX", "value": "mx.mail.com", "priority": 10},
        )
        assert mx.status_code == 201
        assert mx.json()["ttl"] == 3600

        # Switching away from MX drops the priority
        changed = admin_client.put(f"/api/dns-records/{mx.json()['id']}", json={"type": "CNAME"})
        assert changed.json()["priority"] is None

    def test_owner_scoping(self, user_client, other_client):
        domain = user_client.post("/api/domains", json={"domain": "alice.com", "type": "primary"}).json()

        assert other_client.get(f"/api/domains/{domain['id']}").status_code == 404
        assert other_client.delete(f"/api/domains/{domain['id']}").status_code == 404
        assert other_client.get(f"/api/dns-records/{domain['id']}").status_code == 404
        assert other_client.get("/api/domains").json() == []
        assert [d["domain"] for d in user_client.get("/api/domains").json()] == ["alice.com"]

        record = other_client.post(
            "/api/dns-records", json={"domainId": domain["id"], "name": "x", "type": "A", "value": "1.1.1.1"}
        )
        assert record.status_code == 404

    def test_non_admin_cannot_create_for_someone_else(self, user_client, storage):
        admin = storage.get_user_by_username("admin")
        response = user_client.post("/api/domains", json={"domain": "evil.com", "type": "primary", "userId": admin.id})
        assert response.status_code == 403

    def test_package_domain_limit(self, user_client):
        # Starter package allows three domains
        for name in ("a.com", "b.com", "c.com"):
            assert user_client.post("/api/domains", json={"domain": name, "type": "addon"}).status_code == 201

        response = user_client.post("/api/domains", json={"domain": "d.com", "type": "addon"})
        assert response.status_code == 400
        assert response.json()["details"]["limit"] == 3

    def test_deleting_domain_keeps_records(self, admin_client):
        domain_id = admin_client.post("/api/domains", json={"domain": "gone.com", "type": "primary"}).json()["id"]
        admin_client.post("/api/dns-records", json={"domainId": domain_id, "name": "@", "type": "A", "value": "1.1.1.1"})

        assert admin_client.delete(f"/api/domains/{domain_id}").status_code == 200
        assert len(admin_client.get(f"/api/dns-records/{domain_id}").json()) == 1
