"""End-to-end CLI tests over a JSON catalog in a temp directory."""

import json

import pytest
from click.testing import CliRunner

from shopcat.infrastructure import bootstrap
from shopcat.infrastructure.cli.main import cli
from tests.fakes import FakeImageHost

SEED = {
    "p1": {"name": "Mug", "description": "Ceramic", "price": "5.50", "imageUrl": ""},
    "p2": {"name": "Lamp", "description": "Desk", "price": "4.50", "imageUrl": ""},
}


@pytest.fixture
def catalog(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SHOPCAT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SHOPCAT_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("SHOPCAT_FEED_POLL_INTERVAL_SECONDS", "0.02")
    path = tmp_path / "data" / "products.json"
    path.parent.mkdir()
    path.write_text(json.dumps(SEED))
    return path


def _run(*args):
    return CliRunner().invoke(cli, [*args, "--timeout", "10"])


class TestProductCommands:

    def test_list(self, catalog):
        result = _run("product", "list")
        assert result.exit_code == 0, result.output
        assert "Mug" in result.output
        assert "$5.50" in result.output
        assert "Lamp" in result.output

    def test_list_empty(self, catalog):
        catalog.write_text("{}")
        result = _run("product", "list")
        assert "No products available." in result.output

    def test_update_price_only(self, catalog):
        result = _run("product", "update", "--id", "p1", "--price", "9.99")

        assert result.exit_code == 0, result.output
        assert "Product #p1 updated." in result.output
        assert "$9.99" in result.output
        stored = json.loads(catalog.read_text())["p1"]
        assert stored == {"name": "Mug", "description": "Ceramic", "price": "9.99", "imageUrl": ""}

    def test_update_needs_a_field(self, catalog):
        result = CliRunner().invoke(cli, ["product", "update", "--id", "p1"])
        assert result.exit_code == 2
        assert "Give at least one of" in result.output

    def test_update_unknown_product(self, catalog):
        result = _run("product", "update", "--id", "ghost", "--name", "X")
        assert result.exit_code == 1
        assert "No document with id 'ghost'" in result.output

    def test_delete(self, catalog):
        result = _run("product", "delete", "--id", "p1")
        assert result.exit_code == 0, result.output
        assert "Delete requested for product #p1." in result.output
        assert "p1" not in json.loads(catalog.read_text())

    def test_add(self, catalog, monkeypatch, tmp_path):
        host = FakeImageHost(link="https://i.imgur.com/new.jpg")
        monkeypatch.setattr(bootstrap, "image_host", lambda settings: host)
        image = tmp_path / "lamp.jpg"
        image.write_bytes(b"jpeg")

        result = _run(
            "product", "add", "--name", "Chair", "--price", "15.00", "--image", str(image)
        )

        assert result.exit_code == 0, result.output
        assert "'Chair' added at $15.00" in result.output
        stored = [d for d in json.loads(catalog.read_text()).values() if d["name"] == "Chair"]
        assert stored[0]["imageUrl"] == "https://i.imgur.com/new.jpg"
        assert host.artifact_existed == [True]
        assert list((tmp_path / "cache").iterdir()) == []

    def test_add_rejects_bad_price(self, catalog):
        result = _run("product", "add", "--name", "Chair", "--price", "cheap", "--image", "x.jpg")
        assert result.exit_code == 1
        assert "Invalid money amount" in result.output

    def test_add_without_client_id(self, catalog, monkeypatch, tmp_path):
        monkeypatch.delenv("SHOPCAT_IMGUR_CLIENT_ID", raising=False)
        image = tmp_path / "lamp.jpg"
        image.write_bytes(b"jpeg")

        result = _run("product", "add", "--name", "Chair", "--price", "15", "--image", str(image))

        assert result.exit_code == 1
        assert "Image upload failed" in result.output
        assert len(json.loads(catalog.read_text())) == 2


class TestCartCommands:

    def test_subtotal(self, catalog):
        result = _run("cart", "subtotal", "--id", "p1", "--id", "p2", "--id", "p1")
        assert result.exit_code == 0, result.output
        assert "Subtotal" in result.output
        assert "$10.00" in result.output

    def test_unknown_product(self, catalog):
        result = _run("cart", "subtotal", "--id", "zzz")
        assert result.exit_code == 1
        assert "Product with ID 'zzz' not found" in result.output

    def test_checkout(self, catalog):
        result = _run("cart", "checkout", "--phone", "0700000000", "--id", "p1")
        assert result.exit_code == 0, result.output
        assert "Payment initiated successfully!" in result.output

    def test_checkout_bad_phone(self, catalog):
        result = _run("cart", "checkout", "--phone", "abc", "--id", "p1")
        assert result.exit_code == 1
        assert "Invalid phone number" in result.output
