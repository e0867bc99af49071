import json

from typer.testing import CliRunner

from photolot.cli import app
from tests.helpers.image_factory import ASCENDING_ROW, DESCENDING_ROW, rows_with_descending

runner = CliRunner()


class TestCLIBasicFunctionality:
    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ["hash", "group", "upload-url", "download-url", "data-uri", "list"]:
            assert command in result.stdout

    def test_hash_prints_decimal(self, save_grid):
        path = save_grid("grid.png", rows_with_descending(1))

        result = runner.invoke(app, ["hash", str(path)])

        assert result.exit_code == 0
        assert result.stdout.strip() == "255"

    def test_hash_prints_hex(self, save_grid):
        path = save_grid("grid.png", [DESCENDING_ROW] * 8)

        result = runner.invoke(app, ["hash", str(path), "--hex"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "f" * 16

    def test_hash_unreadable_file(self, tmp_path):
        bad = tmp_path / "bad.jpg"
        bad.write_bytes(b"not an image")

        result = runner.invoke(app, ["hash", str(bad)])

        assert result.exit_code == 1


class TestGroupCommand:
    def test_group_json(self, save_grid):
        a = save_grid("a.png", [DESCENDING_ROW] * 8)
        b = save_grid("b.png", [ASCENDING_ROW] * 8)
        c = save_grid("c.png", [DESCENDING_ROW] * 8)

        result = runner.invoke(app, ["group", str(a), str(b), str(c), "--threshold", "0.9", "--json"])

        assert result.exit_code == 0
        groups = json.loads(result.stdout)
        assert [g["group_id"] for g in groups] == ["item-1", "item-2"]
        assert groups[0]["photos"] == [str(a), str(c)]
        assert groups[0]["confidence"] == 0.85
        assert groups[1]["primary_photo"] == str(b)

    def test_group_text(self, save_grid):
        a = save_grid("a.png", [DESCENDING_ROW] * 8)

        result = runner.invoke(app, ["group", str(a)])

        assert result.exit_code == 0
        assert "item-1 (1 photos, confidence 0.50)" in result.stdout
        assert f"* {a}" in result.stdout

    def test_group_average(self, save_grid):
        a = save_grid("a.png", [DESCENDING_ROW] * 8)
        b = save_grid("b.png", [DESCENDING_ROW] * 8)

        result = runner.invoke(app, ["group", str(a), str(b), "--average", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["confidence"] == 1.0

    def test_group_rejects_bad_threshold(self, save_grid):
        a = save_grid("a.png", [DESCENDING_ROW] * 8)

        result = runner.invoke(app, ["group", str(a), "--threshold", "1.5"])

        assert result.exit_code == 2

    def test_group_aborts_on_decode_failure(self, save_grid, tmp_path):
        a = save_grid("a.png", [DESCENDING_ROW] * 8)
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"garbage")

        result = runner.invoke(app, ["group", str(a), str(bad)])

        assert result.exit_code == 1


class TestSignedUrlCommands:
    def test_upload_url(self, tmp_path, private_key_pem):
        creds = tmp_path / "sa.json"
        creds.write_text(json.dumps({"client_email": "cli@example.com", "private_key": private_key_pem}))

        result = runner.invoke(app, ["upload-url", "b", "o.jpg", "--credentials", str(creds)])

        assert result.exit_code == 0
        url = result.stdout.strip()
        assert url.startswith("https://storage.googleapis.com/b/o.jpg?GoogleAccessId=cli%40example.com&Expires=")
        assert "&Signature=" in url

    def test_download_url(self, tmp_path, private_key_pem):
        creds = tmp_path / "sa.json"
        creds.write_text(json.dumps({"client_email": "cli@example.com", "private_key": private_key_pem}))

        result = runner.invoke(app, ["download-url", "b", "o.jpg", "-c", str(creds)])

        assert result.exit_code == 0
        assert result.stdout.startswith("https://storage.googleapis.com/b/o.jpg?")

    def test_missing_credentials(self, tmp_path):
        result = runner.invoke(app, ["upload-url", "b", "o.jpg", "--credentials", str(tmp_path / "absent.json")])

        assert result.exit_code == 1


class TestFileCommands:
    def test_data_uri(self, tmp_path):
        path = tmp_path / "x.gif"
        path.write_bytes(b"GIF89a")

        result = runner.invoke(app, ["data-uri", str(path)])

        assert result.exit_code == 0
        assert result.stdout.strip() == "data:image/gif;base64,R0lGODlh"

    def test_data_uri_missing(self, tmp_path):
        result = runner.invoke(app, ["data-uri", str(tmp_path / "nope.jpg")])
        assert result.exit_code == 1

    def test_list(self, tmp_path):
        (tmp_path / "a.jpg").write_bytes(b"x")
        (tmp_path / "notes.txt").write_bytes(b"x")

        result = runner.invoke(app, ["list", str(tmp_path)])

        assert result.exit_code == 0
        assert result.stdout.strip().splitlines() == [str(tmp_path / "a.jpg")]
