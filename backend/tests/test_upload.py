"""
MedDent - Image upload tests
Run: cd backend && pytest tests/test_upload.py -v
"""

from pathlib import Path

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _upload(client, headers, content=PNG_BYTES, mime="image/png", type_="doctors", name="photo.png"):
    return client.post(
        "/api/upload/image",
        files={"file": (name, content, mime)},
        data={"type": type_},
        headers=headers,
    )


class TestUploadImage:
    def test_upload_and_serve(self, client, admin_headers):
        from config import UPLOAD_DIR

        r = _upload(client, admin_headers)
        assert r.status_code == 200
        body = r.json()
        assert body["url"].startswith("/uploads/doctors/")
        assert body["url"].endswith(".png")
        assert body["publicUrl"].endswith(body["url"])

        stored = Path(UPLOAD_DIR) / body["url"][len("/uploads/"):]
        assert stored.read_bytes() == PNG_BYTES

        served = client.get(body["url"])
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    def test_requires_admin(self, client):
        assert _upload(client, {}).status_code == 401

    def test_rejects_mime(self, client, admin_headers):
        r = _upload(client, admin_headers, content=b"%PDF-1.4", mime="application/pdf", name="x.pdf")
        assert r.status_code == 400

    def test_rejects_oversize(self, client, admin_headers, monkeypatch):
        import routes.upload
        monkeypatch.setattr(routes.upload, "MAX_FILE_SIZE", 16)
        assert _upload(client, admin_headers).status_code == 400

    def test_rejects_bad_type_folder(self, client, admin_headers):
        assert _upload(client, admin_headers, type_="../etc").status_code == 400

    def test_rejects_empty_file(self, client, admin_headers):
        assert _upload(client, admin_headers, content=b"").status_code == 400


class TestDeleteImage:
    def test_delete(self, client, admin_headers):
        url = _upload(client, admin_headers).json()["url"]
        r = client.request("DELETE", "/api/upload/image", json={"url": url}, headers=admin_headers)
        assert r.status_code == 200
        r = client.request("DELETE", "/api/upload/image", json={"url": url}, headers=admin_headers)
        assert r.status_code == 404

    def test_path_traversal_rejected(self, client, admin_headers):
        r = client.request("DELETE", "/api/upload/image", json={"url": "/uploads/../../etc/passwd"},
                           headers=admin_headers)
        assert r.status_code == 400

    def test_outside_prefix_rejected(self, client, admin_headers):
        r = client.request("DELETE", "/api/upload/image", json={"url": "/etc/passwd"}, headers=admin_headers)
        assert r.status_code == 400

    def test_root_rejected(self, client, admin_headers):
        r = client.request("DELETE", "/api/upload/image", json={"url": "/uploads/"}, headers=admin_headers)
        assert r.status_code == 400
