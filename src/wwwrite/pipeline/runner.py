"""
Drive the rewrite over every package: discover, rewrite, persist.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from wwwrite.exceptions import GrammarNotFoundError, ParseError, WwwriteError
from wwwrite.logging_config import logger
from wwwrite.rewrite import RewriteConfig, RewriteEngine
from wwwrite.schemas import FileOutcome, PackageInfo, RewriteReport
from wwwrite.tracing import trace
from .config import PipelineConfig
from .discovery import find_declaration_files, output_path_for
from .writer import atomic_write, read_source


def process_file(
    path: Path,
    package: PackageInfo,
    engine: RewriteEngine,
    config: Optional[PipelineConfig] = None,
    dry_run: bool = False,
    raise_errors: bool = False,
) -> FileOutcome:
    """
    Rewrite one declaration file and write the result if anything changed.

    Failures are reported in the outcome (and logged with the path) unless
    raise_errors is set. A failed file never produces output.
    """
    config = config or PipelineConfig()
    try:
        try:
            source = read_source(path)
        except UnicodeDecodeError as e:
            raise ParseError(str(path), f"not valid UTF-8: {e}") from e

        result = engine.rewrite(source, file_path=str(path))
        outcome = FileOutcome(
            source=str(path),
            package=package.name,
            status="unchanged",
            replacements=len(result.import_edits),
            docblock_annotated=result.docblock_edit is not None,
        )
        if not result.changed:
            logger.debug(f"Unchanged: {path}")
            return outcome

        output = output_path_for(path, package, config)
        outcome.output = str(output)
        if dry_run:
            outcome.status = "changed"
            logger.info(f"Would write {output}")
        else:
            atomic_write(output, result.text)
            outcome.status = "written"
            logger.info(f"Wrote {output} ({outcome.replacements} import(s) rewritten)")
        return outcome

    except GrammarNotFoundError:
        raise
    except (WwwriteError, OSError) as e:
        if raise_errors:
            raise
        logger.error(f"Failed to rewrite {path}: {e}")
        return FileOutcome(
            source=str(path),
            package=package.name,
            status="failed",
            error=f"{type(e).__name__}: {e}",
        )


@trace
def rewrite_packages(
    packages: Sequence[PackageInfo],
    mapping: Mapping[str, str],
    rewrite_config: Optional[RewriteConfig] = None,
    config: Optional[PipelineConfig] = None,
    dry_run: bool = False,
    fail_fast: bool = False,
) -> RewriteReport:
    """
    Rewrite the declaration files of every package.

    Private packages are processed too; only the mapping is limited to public
    ones. One file's failure does not stop the others unless fail_fast is set,
    in which case the first failure propagates.

    Args:
        packages: Packages to process.
        mapping: Shared read-only name mapping.
        rewrite_config: Engine configuration.
        config: Discovery/output configuration (also sets the worker count).
        dry_run: Report what would be written without writing.
        fail_fast: Raise on the first failing file.

    Returns:
        RewriteReport with one outcome per discovered file, in discovery order.
    """
    config = config or PipelineConfig()
    engine = RewriteEngine(mapping, rewrite_config)
    start_time = time.time()

    tasks: List[Tuple[Path, PackageInfo]] = [
        (path, package)
        for package in packages
        for path in find_declaration_files(package, config)
    ]
    logger.info(f"Rewriting {len(tasks)} declaration files from {len(packages)} packages")

    def run(task: Tuple[Path, PackageInfo]) -> FileOutcome:
        path, package = task
        return process_file(path, package, engine, config, dry_run=dry_run, raise_errors=fail_fast)

    if config.jobs > 1 and len(tasks) > 1:
        with ThreadPoolExecutor(max_workers=min(config.jobs, len(tasks))) as executor:
            outcomes = list(executor.map(run, tasks))
    else:
        outcomes = [run(task) for task in tasks]

    report = RewriteReport(
        packages=len(packages),
        files=outcomes,
        duration=time.time() - start_time,
        dry_run=dry_run,
    )
    if report.failed:
        logger.warning(f"{len(report.failed)} of {len(outcomes)} files failed")
    return report
