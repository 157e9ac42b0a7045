# tests/test_cli.py
"""Tests for the statichash CLI."""

import json

import pytest

from statichash.cli import main
from statichash.digest import digest

STYLES = b"body { margin: 0; }\n"


class TestCli:
    """Test CLI sub-commands."""

    def test_hash(self, project_dir, capsys):
        """Test hash prints token and public name."""
        assert main(["hash", str(project_dir / "css" / "styles.css")]) == 0
        token = digest(STYLES)
        assert capsys.readouterr().out.strip() == f"{token}  styles-{token}.css"

    def test_build(self, project_dir, capsys):
        """Test build lists the registry."""
        assert main(["build", str(project_dir / "assets.yaml")]) == 0
        out = capsys.readouterr().out
        assert "Registry: 2 files" in out
        assert f"styles-{digest(STYLES)}.css" in out

    def test_build_json(self, project_dir, capsys):
        """Test build --json output is sorted by name."""
        assert main(["build", str(project_dir / "assets.yaml"), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert {d["identifier"] for d in data} == {"styles_css", "crab_svg"}
        names = [d["name"] for d in data]
        assert names == sorted(names)

    def test_build_use_env(self, project_dir, capsys, monkeypatch):
        """Test build --use-env picks up injected tokens."""
        monkeypatch.setenv("styles_css_HASH", "FromEnv1")
        assert main(["build", str(project_dir / "assets.yaml"), "--use-env"]) == 0
        assert "styles-FromEnv1.css" in capsys.readouterr().out

    def test_env(self, project_dir, capsys):
        """Test env prints <ID>_HASH assignments."""
        assert main(["env", str(project_dir / "assets.yaml")]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert f"styles_css_HASH={digest(STYLES)}" in lines

    def test_build_failure(self, project_dir, capsys):
        """Test a missing asset exits 1 with an error message."""
        (project_dir / "css" / "styles.css").unlink()
        assert main(["build", str(project_dir / "assets.yaml")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_hash_without_extension(self, project_dir, capsys):
        """Test a file without extension exits 1."""
        (project_dir / "README").write_text("hi")
        assert main(["hash", str(project_dir / "README")]) == 1
        assert "no extension" in capsys.readouterr().err

    @pytest.mark.parametrize("algorithm", ["crc32", "shake_128"])
    def test_build_bad_algorithm(self, project_dir, capsys, algorithm):
        """Test an unusable manifest algorithm exits 1 with an error message."""
        manifest = project_dir / "bad.yaml"
        manifest.write_text(
            f"algorithm: {algorithm}\nassets:\n  - id: styles_css\n    path: css/styles.css\n"
        )
        assert main(["build", str(manifest)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_hash_bad_algorithm(self, project_dir, capsys):
        """Test an unusable --algorithm is rejected as a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["hash", "--algorithm", "crc32", str(project_dir / "css" / "styles.css")])
        assert exc_info.value.code == 2
        assert "Unsupported hash algorithm" in capsys.readouterr().err
