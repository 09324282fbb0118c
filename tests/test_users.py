from tests.conftest import book, create_pet, register

class TestUsers:

    def test_veterinarians_visible_to_any_user(self, client, users):
        _, alice_headers = users["alice"]
        register(client, "aaron vet", "aaron@example.com", "veterinarian", phone="555-0100")

        response = client.get("/api/v1/users/veterinarians", headers=alice_headers)
        assert response.status_code == 200
        vets = response.json()["data"]["veterinarians"]
        assert [vet["name"] for vet in vets] == ["Aaron Vet", "Olga Vet", "Victor Vet"]
        assert vets[0]["phone"] == "555-0100"
        assert "role" not in vets[0]

    def test_user_listing_is_admin_only(self, client, users):
        _, admin_headers = users["admin"]
        _, alice_headers = users["alice"]
        _, vet_headers = users["vet"]

        response = client.get("/api/v1/users", headers=admin_headers)
        assert response.status_code == 200
        listed = response.json()["data"]["users"]
        assert len(listed) == 5
        assert {user["role"] for user in listed} == {"admin", "veterinarian", "client"}

        for headers in (alice_headers, vet_headers):
            response = client.get("/api/v1/users", headers=headers)
            assert response.status_code == 403
            assert response.json()["message"] == "Access denied. Admin only."

    def test_delete_user_without_records(self, client, users):
        bob, _ = users["bob"]
        _, admin_headers = users["admin"]

        response = client.delete(f"/api/v1/users/{bob['id']}", headers=admin_headers)
        assert response.status_code == 200

        listed = client.get("/api/v1/users", headers=admin_headers).json()["data"]["users"]
        assert bob["id"] not in [user["id"] for user in listed]

    def test_delete_user_with_pets_is_refused(self, client, users):
        alice, alice_headers = users["alice"]
        vet, _ = users["vet"]
        _, admin_headers = users["admin"]
        pet = create_pet(client, alice_headers)
        book(client, alice_headers, pet["id"], vet["id"])

        for user in (alice, vet):
            response = client.delete(f"/api/v1/users/{user['id']}", headers=admin_headers)
            assert response.status_code == 400
            assert response.json()["message"] == "User still owns pets or appointments"

    def test_delete_user_guards(self, client, users):
        admin, admin_headers = users["admin"]
        bob, _ = users["bob"]
        _, alice_headers = users["alice"]

        assert client.delete(f"/api/v1/users/{admin['id']}", headers=admin_headers).status_code == 403
        assert client.delete(f"/api/v1/users/{bob['id']}", headers=alice_headers).status_code == 403
        assert client.delete("/api/v1/users/9999", headers=admin_headers).status_code == 404

class TestDashboard:

    def _stats(self, client, headers):
        response = client.get("/api/v1/dashboard/stats", headers=headers)
        assert response.status_code == 200
        return response.json()["data"]["stats"]

    def test_stats_are_role_scoped(self, client, users):
        _, alice_headers = users["alice"]
        _, bob_headers = users["bob"]
        vet, vet_headers = users["vet"]
        other_vet, _ = users["other_vet"]
        _, admin_headers = users["admin"]

        alice_pet = create_pet(client, alice_headers)
        create_pet(client, alice_headers, name="fido")
        bob_pet = create_pet(client, bob_headers, name="tom", species="cat")
        first = book(client, alice_headers, alice_pet["id"], vet["id"])
        book(client, bob_headers, bob_pet["id"], other_vet["id"])
        client.put(
            f"/api/v1/appointments/{first['id']}", json={"status": "completed"}, headers=vet_headers
        )

        alice_stats = self._stats(client, alice_headers)
        assert alice_stats["pets"] == 2
        assert alice_stats["appointments"] == 1
        assert alice_stats["appointments_by_status"] == {
            "scheduled": 0, "completed": 1, "cancelled": 0
        }

        vet_stats = self._stats(client, vet_headers)
        assert vet_stats["appointments"] == 1
        assert "pets" not in vet_stats

        admin_stats = self._stats(client, admin_headers)
        assert admin_stats["pets"] == 3
        assert admin_stats["appointments"] == 2
        assert admin_stats["veterinarians"] == 2
        assert admin_stats["appointments_by_status"]["scheduled"] == 1
