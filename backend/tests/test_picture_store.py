import httpx

from fitgoals.services.picture_store import PictureStore


def test_local_upload_writes_file(tmp_path):
    store = PictureStore(uploads_dir=str(tmp_path))
    url = store.save(5, "me.PNG", b"\x89PNG", "image/png")

    assert url == "/uploads/profile_pictures/5/avatar.png"
    assert (tmp_path / "profile_pictures" / "5" / "avatar.png").read_bytes() == b"\x89PNG"


def test_remote_upload_returns_storage_url(tmp_path):
    def handler(request):
        assert request.method == "PUT"
        assert request.headers["content-type"] == "image/jpeg"
        return httpx.Response(200, json={"url": "https://cdn.example.com/p/5.jpg"})

    store = PictureStore(
        uploads_dir=str(tmp_path),
        storage_url="https://storage.example.com/bucket/",
        transport=httpx.MockTransport(handler),
    )
    assert store.save(5, "me.jpg", b"jpeg", "image/jpeg") == "https://cdn.example.com/p/5.jpg"


def test_remote_failure_is_not_raised(tmp_path):
    store = PictureStore(
        uploads_dir=str(tmp_path),
        storage_url="https://storage.example.com/bucket",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    assert store.save(5, "me.jpg", b"jpeg", "image/jpeg") is None
