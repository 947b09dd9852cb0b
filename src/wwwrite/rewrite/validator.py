"""
Post-edit checks: the spliced output must still describe the same program
shape, with every rewritten reference reading back as its mapped value.
"""

from typing import List

from wwwrite.exceptions import SerializationError
from wwwrite.logging_config import logger
from wwwrite.parser import find_error_nodes, find_import_statements, import_source_node, parse_bytes
from wwwrite.schemas import ImportEdit
from .literals import string_value


def verify_output(
    output: bytes,
    dialect: str,
    import_count: int,
    error_count: int,
    edits: List[ImportEdit],
    file_path: str = "<source>",
) -> None:
    """
    Re-parse the output and compare it with what the edits promised.

    Raises:
        SerializationError: If the output parses to a different number of
            imports, has more syntax errors than the input, or an edited
            reference does not hold its replacement value.
    """
    tree = parse_bytes(output, dialect)
    root = tree.root_node

    errors = len(find_error_nodes(root))
    if errors > error_count:
        raise SerializationError(
            file_path, f"output has {errors} syntax errors, input had {error_count}"
        )

    statements = find_import_statements(root)
    if len(statements) != import_count:
        raise SerializationError(
            file_path,
            f"output has {len(statements)} import statements, input had {import_count}",
        )

    values = []
    for statement in statements:
        source = import_source_node(statement)
        values.append(string_value(source) if source is not None else None)

    for edit in edits:
        actual = values[edit.statement_index]
        if actual != edit.replacement:
            raise SerializationError(
                file_path,
                f"reference on line {edit.line} reads back as {actual!r}, "
                f"expected {edit.replacement!r}",
            )

    logger.debug(f"Verified {len(edits)} rewritten references in {file_path}")
