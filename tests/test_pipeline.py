"""Integration tests for discovery, rewriting and persistence."""

import pytest

pytestmark = pytest.mark.integration

from wwwrite.exceptions import ParseError
from wwwrite.mapping import build_name_mapping, discover_packages
from wwwrite.pipeline import (
    PipelineConfig,
    atomic_write,
    find_declaration_files,
    process_file,
    read_source,
    rewrite_packages,
)
from wwwrite.rewrite import RewriteEngine


def _run(root, **kwargs):
    packages = discover_packages(root)
    return rewrite_packages(packages, build_name_mapping(packages), **kwargs)


def test_changed_files_are_written(lexical_repo):
    report = _run(lexical_repo)

    by_package = {outcome.package: outcome for outcome in report.files}
    assert set(by_package) == {"lexical", "@lexical/react", "lexical-playground"}

    lexical = by_package["lexical"]
    assert lexical.status == "written"
    assert lexical.replacements == 3
    assert lexical.docblock_annotated

    output = lexical_repo / "packages" / "lexical" / "dist" / "LexicalComposer.js.flow"
    assert lexical.output == str(output)
    text = output.read_text(encoding="utf-8")
    assert "import type {LexicalEditor, LexicalNode} from 'Lexical';" in text
    assert "import type {ListType} from 'LexicalList';" in text
    assert "import type {Klass} from 'shared/types';" in text
    assert " * @flow strict\n * @generated\n * @oncall lexical_web_text_editor\n" in text
    assert text.endswith("declare export function LexicalComposer(Props): React$MixedElement;\n")


def test_private_packages_are_rewritten(lexical_repo):
    _run(lexical_repo)
    assert (lexical_repo / "packages" / "lexical-playground" / "dist" / "LexicalComposer.js.flow").exists()


def test_unchanged_files_are_not_written(lexical_repo):
    report = _run(lexical_repo)
    react = next(o for o in report.files if o.package == "@lexical/react")

    assert react.status == "unchanged"
    assert react.output is None
    assert not (lexical_repo / "packages" / "lexical-react" / "dist").exists()


def test_failures_are_isolated(broken_repo):
    report = _run(broken_repo)

    assert len(report.failed) == 1
    failed = report.failed[0]
    assert failed.package == "@lexical/broken"
    assert failed.error.startswith("ParseError")
    assert failed.source.endswith("Broken.js.flow")
    assert not (broken_repo / "packages" / "lexical-broken" / "dist").exists()
    assert report.count("written") == 2


def test_fail_fast(broken_repo):
    with pytest.raises(ParseError):
        _run(broken_repo, fail_fast=True)


def test_dry_run_writes_nothing(lexical_repo):
    report = _run(lexical_repo, dry_run=True)

    assert report.dry_run
    assert report.count("changed") == 2
    assert report.count("written") == 0
    assert not list(lexical_repo.glob("packages/*/dist"))


def test_parallel_run_keeps_order(broken_repo):
    serial = _run(broken_repo, dry_run=True)
    parallel = _run(broken_repo, dry_run=True, config=PipelineConfig(jobs=4))

    assert [(o.source, o.status) for o in parallel.files] == [(o.source, o.status) for o in serial.files]


def test_rerun_is_stable(lexical_repo):
    _run(lexical_repo)
    output = lexical_repo / "packages" / "lexical" / "dist" / "LexicalComposer.js.flow"
    first = output.read_bytes()
    _run(lexical_repo)
    assert output.read_bytes() == first


def test_find_declaration_files_uses_config(lexical_repo):
    package = discover_packages(lexical_repo)[0]
    assert [p.name for p in find_declaration_files(package)] == ["LexicalComposer.js.flow"]
    assert find_declaration_files(package, PipelineConfig(flow_glob="*.ts")) == []
    assert find_declaration_files(package, PipelineConfig(flow_dir="missing")) == []


def test_process_file_keeps_crlf(tmp_path, lexical_repo, lexical_mapping):
    package = discover_packages(lexical_repo)[0]
    source = tmp_path / "Crlf.js.flow"
    source.write_bytes(b"/**\r\n * @flow strict\r\n */\r\nimport x from 'lexical';\r\n")

    outcome = process_file(source, package, RewriteEngine(lexical_mapping))

    assert outcome.status == "written"
    written = (lexical_repo / "packages" / "lexical" / "dist" / "Crlf.js.flow").read_bytes()
    assert written == (
        b"/**\r\n * @flow strict\r\n * @generated\r\n * @oncall lexical_web_text_editor\r\n */\r\n"
        b"import x from 'Lexical';\r\n"
    )


def test_process_file_rejects_non_utf8(tmp_path, lexical_repo, lexical_mapping):
    package = discover_packages(lexical_repo)[0]
    source = tmp_path / "Latin1.js.flow"
    source.write_bytes(b"// caf\xe9\nimport x from 'lexical';\n")

    outcome = process_file(source, package, RewriteEngine(lexical_mapping))

    assert outcome.status == "failed"
    assert "UTF-8" in outcome.error


def test_atomic_write_creates_directory(tmp_path):
    target = tmp_path / "dist" / "nested" / "File.js.flow"
    atomic_write(target, "a\r\nb\n")

    assert read_source(target) == "a\r\nb\n"
    assert [p.name for p in target.parent.iterdir()] == ["File.js.flow"]
