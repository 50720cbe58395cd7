import sys
from pathlib import Path

from postman_to_http.config import ConverterConfig
from postman_to_http.converter.collection import convert_items
from postman_to_http.parser.base import Collection, Item, Request
from postman_to_http.parser.postman import load_collection

FIXTURES = Path(__file__).parent / "fixtures"


def _collection(items: list[dict]) -> Collection:
    return Collection.model_validate({"item": items})


def _files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


def _dirs(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_dir()}


class TestConvertItems:
    def test_single_request(self, tmp_path):
        c = _collection([{
            "name": "Get User",
            "request": {
                "method": "GET",
                "url": "https://api.test/users/1",
                "header": [{"key": "Accept", "value": "application/json"}],
            },
        }])
        report = convert_items(c.items, tmp_path)

        out = tmp_path / "Get User.http"
        assert out.read_text(encoding="utf-8") == "GET https://api.test/users/1\nAccept: application/json\n\n"
        assert report.files_written == [out]
        assert report.ok

    def test_nested_folder(self, tmp_path):
        c = _collection([{
            "name": "Auth",
            "item": [{
                "name": "Login",
                "request": {
                    "method": "POST",
                    "url": "https://api.test/login",
                    "body": {"raw": '{"u":"a"}', "mode": "raw"},
                },
            }],
        }])
        convert_items(c.items, tmp_path)

        text = (tmp_path / "Auth" / "Login.http").read_text(encoding="utf-8")
        assert text.split("\n\n", 1)[1] == '{"u":"a"}'

    def test_paths_mirror_tree(self, tmp_path):
        collection = load_collection(FIXTURES / "sample.postman_collection.json")
        convert_items(collection.items, tmp_path)

        assert _files(tmp_path) == {
            "Get User.http",
            "Auth/Login.http",
            "Auth/Tokens/Refresh_ token_v2.http",
        }
        assert _dirs(tmp_path) == {"Auth", "Auth/Tokens"}

    def test_folder_without_requests_still_created(self, tmp_path):
        c = _collection([{"name": "Outer", "item": [{"name": "Inner", "item": [{"name": "Nothing"}]}]}])
        report = convert_items(c.items, tmp_path)

        assert (tmp_path / "Outer" / "Inner").is_dir()
        assert _files(tmp_path) == set()
        assert report.directories_created == [tmp_path / "Outer", tmp_path / "Outer" / "Inner"]

    def test_item_with_request_and_children(self, tmp_path):
        c = _collection([{
            "name": "Both",
            "request": {"method": "GET", "url": "http://x/both"},
            "item": [{"name": "Child", "request": {"method": "GET", "url": "http://x/child"}}],
        }])
        convert_items(c.items, tmp_path)

        assert _files(tmp_path) == {"Both.http", "Both/Child.http"}

    def test_item_with_neither_produces_nothing(self, tmp_path):
        report = convert_items(_collection([{"name": "Ghost"}]).items, tmp_path)
        assert list(tmp_path.iterdir()) == []
        assert report.files_written == []

    def test_names_sanitized(self, tmp_path):
        c = _collection([{
            "name": "v1: users",
            "item": [{"name": "GET:/users", "request": {"method": "GET", "url": "http://x"}}],
        }])
        convert_items(c.items, tmp_path)
        assert _files(tmp_path) == {"v1_ users/GET__users.http"}

    def test_existing_directory_is_reused(self, tmp_path):
        (tmp_path / "Auth").mkdir()
        c = _collection([{"name": "Auth", "item": [{"name": "Login", "request": {"method": "POST"}}]}])
        report = convert_items(c.items, tmp_path)
        assert report.ok
        assert (tmp_path / "Auth" / "Login.http").exists()

    def test_duplicate_names_last_write_wins(self, tmp_path):
        c = _collection([
            {"name": "a:b", "request": {"method": "GET", "url": "http://first"}},
            {"name": "a/b", "request": {"method": "GET", "url": "http://second"}},
        ])
        convert_items(c.items, tmp_path)
        assert (tmp_path / "a_b.http").read_text(encoding="utf-8") == "GET http://second\n\n"

    def test_custom_extension(self, tmp_path):
        c = _collection([{"name": "Ping", "request": {"method": "GET", "url": "http://x"}}])
        convert_items(c.items, tmp_path, ConverterConfig(request_extension=".rest"))
        assert _files(tmp_path) == {"Ping.rest"}


class TestPartialFailure:
    def test_folder_blocked_by_file_skips_subtree(self, tmp_path):
        (tmp_path / "Blocked").write_text("in the way", encoding="utf-8")
        c = _collection([
            {"name": "Blocked", "item": [{"name": "Lost", "request": {"method": "GET"}}]},
            {"name": "After", "request": {"method": "GET", "url": "http://x"}},
        ])
        report = convert_items(c.items, tmp_path)

        assert not report.ok
        assert "Blocked" in report.errors[0]
        assert (tmp_path / "After.http").exists()
        assert report.files_written == [tmp_path / "After.http"]

    def test_unwritable_request_continues_with_siblings(self, tmp_path):
        (tmp_path / "First.http").mkdir()
        c = _collection([
            {"name": "First", "request": {"method": "GET", "url": "http://1"}},
            {"name": "Second", "request": {"method": "GET", "url": "http://2"}},
        ])
        report = convert_items(c.items, tmp_path)

        assert len(report.errors) == 1
        assert "First" in report.errors[0]
        assert (tmp_path / "Second.http").read_text(encoding="utf-8") == "GET http://2\n\n"

    def test_failures_logged(self, tmp_path, caplog):
        (tmp_path / "Broken.http").mkdir()
        c = _collection([{"name": "Broken", "request": {"method": "GET"}}])
        with caplog.at_level("DEBUG", logger="postman_to_http.converter.collection"):
            convert_items(c.items, tmp_path)
        assert "Broken" in caplog.text

    def test_null_byte_in_name_skips_item(self, tmp_path):
        c = _collection([
            {"name": "bad\u0000name", "request": {"method": "GET", "url": "http://x"}},
            {"name": "bad\u0000folder", "item": [{"name": "Lost", "request": {"method": "GET"}}]},
            {"name": "After", "request": {"method": "GET", "url": "http://after"}},
        ])
        report = convert_items(c.items, tmp_path)

        assert len(report.errors) == 2
        assert _files(tmp_path) == {"After.http"}

    def test_unencodable_text_skips_item(self, tmp_path):
        c = _collection([
            {"name": "Surrogate", "request": {"method": "GET", "url": "http://x/\ud800"}},
            {"name": "After", "request": {"method": "GET", "url": "http://after"}},
        ])
        report = convert_items(c.items, tmp_path)

        assert len(report.errors) == 1
        assert "Surrogate" in report.errors[0]
        assert _files(tmp_path) == {"After.http"}


class TestDeepTrees:
    def test_depth_beyond_recursion_limit(self, tmp_path):
        depth = 300
        node = Item(name="Leaf", request=Request(method="GET", url="http://deep"))
        for _ in range(depth):
            node = Item(name="d", children=[node])

        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(250)
        try:
            report = convert_items([node, Item(name="After", request=Request(method="GET"))], tmp_path)
        finally:
            sys.setrecursionlimit(limit)

        assert report.ok
        assert len(report.directories_created) == depth
        assert report.files_written[0] == tmp_path.joinpath(*["d"] * depth, "Leaf.http")
        assert report.files_written[0].read_text(encoding="utf-8") == "GET http://deep\n\n"
        assert report.files_written[1] == tmp_path / "After.http"
