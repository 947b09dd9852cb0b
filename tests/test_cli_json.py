import json

from typer.testing import CliRunner

from wwwrite.main import app

runner = CliRunner()


def test_rewrite_json(lexical_repo):
    result = runner.invoke(app, ["rewrite", str(lexical_repo), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["packages"] == 4
    assert payload["summary"]["written"] == 2
    assert payload["summary"]["unchanged"] == 1
    assert payload["summary"]["failed"] == 0
    assert (lexical_repo / "packages" / "lexical" / "dist" / "LexicalComposer.js.flow").exists()


def test_rewrite_reports_failures(broken_repo):
    result = runner.invoke(app, ["rewrite", str(broken_repo), "--json", "--jobs", "2"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["summary"]["failed"] == 1
    assert payload["summary"]["written"] == 2


def test_rewrite_dry_run(lexical_repo):
    result = runner.invoke(app, ["rewrite", str(lexical_repo), "--dry-run", "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["dry_run"] is True
    assert payload["summary"]["changed"] == 2
    assert not list(lexical_repo.glob("packages/*/dist"))


def test_rewrite_human_output(lexical_repo):
    result = runner.invoke(app, ["rewrite", str(lexical_repo)])
    assert result.exit_code == 0
    assert "Processed" in result.stdout


def test_rewrite_with_mapping_file(lexical_repo, tmp_path):
    mapping_file = tmp_path / "mapping.json"
    mapping_file.write_text(json.dumps({"shared/types": "SharedTypes"}), encoding="utf-8")

    result = runner.invoke(app, ["rewrite", str(lexical_repo), "--mapping", str(mapping_file), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    replacements = {o["package"]: o["replacements"] for o in payload["files"]}
    assert replacements == {"lexical": 1, "lexical-playground": 1, "@lexical/react": 1}


def test_rewrite_unknown_dialect(lexical_repo):
    result = runner.invoke(app, ["rewrite", str(lexical_repo), "--dialect", "coffeescript", "--json"])
    assert result.exit_code == 2


def test_mapping_json(lexical_repo):
    result = runner.invoke(app, ["mapping", str(lexical_repo), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["@lexical/list"] == "LexicalList"
    assert "lexical-playground" not in payload


def test_transform_prints_rewritten_text(tmp_path):
    source = tmp_path / "Foo.js.flow"
    source.write_text('import x from "lexical/Foo";\n', encoding="utf-8")
    mapping_file = tmp_path / "mapping.json"
    mapping_file.write_text(json.dumps({"lexical/Foo": "LexicalFoo"}), encoding="utf-8")

    result = runner.invoke(app, ["transform", str(source), "--mapping", str(mapping_file)])
    assert result.exit_code == 0
    assert result.stdout == 'import x from "LexicalFoo";\n'
    assert source.read_text(encoding="utf-8") == 'import x from "lexical/Foo";\n'


def test_transform_json(lexical_repo):
    source = lexical_repo / "packages" / "lexical" / "flow" / "LexicalComposer.js.flow"
    result = runner.invoke(app, ["transform", str(source), "--root", str(lexical_repo), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["changed"] is True
    assert len(payload["import_edits"]) == 3
    assert payload["docblock_edit"]["marker_lines"] == [7]


def test_transform_parse_error(tmp_path):
    source = tmp_path / "Broken.js.flow"
    source.write_text("export type Broken = {\n", encoding="utf-8")
    mapping_file = tmp_path / "mapping.json"
    mapping_file.write_text("{}", encoding="utf-8")

    result = runner.invoke(app, ["transform", str(source), "--mapping", str(mapping_file)])
    assert result.exit_code == 1
