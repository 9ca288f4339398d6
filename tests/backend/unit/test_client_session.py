"""
Unit tests for client.session token stores.
"""
from taskmanager.client.session import ClientSession, FileTokenStore, MemoryTokenStore


class TestMemoryTokenStore:
    def test_set_get_clear(self):
        store = MemoryTokenStore()
        assert store.get_token() is None
        store.set_token("abc")
        assert store.get_token() == "abc"
        store.clear_token()
        assert store.get_token() is None


class TestFileTokenStore:
    def test_round_trip(self, tmp_path):
        store = FileTokenStore(tmp_path / "nested" / "token.json")
        assert store.get_token() is None
        store.set_token("abc")
        assert FileTokenStore(tmp_path / "nested" / "token.json").get_token() == "abc"
        store.clear_token()
        assert store.get_token() is None

    def test_clear_when_missing(self, tmp_path):
        FileTokenStore(tmp_path / "absent.json").clear_token()

    def test_corrupt_file_reads_as_no_token(self, tmp_path):
        path = tmp_path / "token.json"
        path.write_text("{not json", encoding="utf-8")
        assert FileTokenStore(path).get_token() is None

    def test_home_directory_is_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        store = FileTokenStore("~/.tasks/token.json")
        assert store.path == tmp_path / ".tasks" / "token.json"
        store.set_token("abc")
        assert (tmp_path / ".tasks" / "token.json").exists()


class TestClientSession:
    def test_defaults_to_memory_store(self):
        session = ClientSession()
        assert not session.is_authenticated
        assert session.auth_headers() == {}

    def test_start_and_end(self):
        store = MemoryTokenStore()
        session = ClientSession(store)
        session.start("tok")
        assert session.is_authenticated
        assert session.auth_headers() == {"Authorization": "Bearer tok"}
        assert store.get_token() == "tok"
        session.end()
        assert session.token is None

