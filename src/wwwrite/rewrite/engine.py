"""
Rewrite engine: maps import references and annotates the docblock of one
declaration file.

The source is parsed into a tree-sitter tree, which keeps exact byte ranges
for every token. Edits are byte-range splices into the original text, so
everything outside the edited ranges is emitted unchanged.
"""

from typing import List, Mapping, Optional, Tuple

from wwwrite.exceptions import ParseError, SerializationError
from wwwrite.logging_config import logger
from wwwrite.parser import (
    error_position,
    find_docblock,
    find_error_nodes,
    find_import_statements,
    has_unbalanced_delimiters,
    import_source_node,
    parse_bytes,
)
from wwwrite.parser.config import COMMENT_NODE_TYPE, STRING_NODE_TYPE
from wwwrite.schemas import DocblockEdit, ImportEdit, RewriteResult
from .config import RewriteConfig
from .docblock import annotate_docblock
from .literals import quote_char, render_string, string_value
from .validator import verify_output

Splice = Tuple[int, int, bytes]


def _within(node, outer) -> bool:
    return outer.start_byte <= node.start_byte and node.end_byte <= outer.end_byte


def apply_splices(data: bytes, splices: List[Splice], file_path: str = "<source>") -> bytes:
    """
    Replace byte ranges of data.

    Raises:
        SerializationError: If two ranges overlap.
    """
    output = []
    cursor = 0
    for start, end, replacement in sorted(splices, key=lambda s: (s[0], s[1])):
        if start < cursor:
            raise SerializationError(
                file_path, f"overlapping edits at byte {start} (previous edit ends at {cursor})"
            )
        output.append(data[cursor:start])
        output.append(replacement)
        cursor = end
    output.append(data[cursor:])
    return b"".join(output)


class RewriteEngine:
    """
    Rewrite declaration sources against a fixed name mapping.

    The engine holds only read-only state (the mapping and the config), so a
    single instance can serve many threads.
    """

    def __init__(self, mapping: Mapping[str, str], config: Optional[RewriteConfig] = None):
        self.mapping = mapping
        self.config = config or RewriteConfig()

    def rewrite(self, source: str, file_path: str = "<source>") -> RewriteResult:
        """
        Rewrite one source text.

        Args:
            source: Declaration file contents.
            file_path: Used in log and error messages only.

        Returns:
            RewriteResult whose `changed` flag tells whether any edit fired.
            When nothing fired, `text` is `source` itself.

        Raises:
            ParseError: The source is malformed around its imports or docblock,
                or leaves a bracket unbalanced.
            SerializationError: The edits produced inconsistent output.
        """
        try:
            data = source.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParseError(file_path, f"source is not encodable as UTF-8: {e}") from e

        tree = parse_bytes(data, self.config.dialect)
        root = tree.root_node
        statements = find_import_statements(root)

        errors = find_error_nodes(root)
        if errors:
            self._check_syntax_errors(root, errors, statements, file_path)

        splices: List[Splice] = []
        import_edits = self._rewrite_imports(statements, splices, file_path)
        docblock_edit = self._annotate_docblock(root, splices)

        if not splices:
            logger.debug(f"No applicable edits in {file_path}")
            return RewriteResult(text=source, syntax_errors=len(errors))

        output = apply_splices(data, splices, file_path)

        if self.config.verify_output:
            verify_output(
                output,
                self.config.dialect,
                import_count=len(statements),
                error_count=len(errors),
                edits=import_edits,
                file_path=file_path,
            )

        logger.debug(
            f"Rewrote {len(import_edits)} import(s) in {file_path}"
            + (", annotated docblock" if docblock_edit else "")
        )
        return RewriteResult(
            text=output.decode("utf-8"),
            import_edits=import_edits,
            docblock_edit=docblock_edit,
            syntax_errors=len(errors),
        )

    def _check_syntax_errors(self, root, errors, statements, file_path: str) -> None:
        """
        Raise ParseError for errors the rewrite cannot work around.

        The grammar does not know every Flow construct (`declare export`,
        `?T`, ...), so recovered errors elsewhere in a declaration are
        expected. They are fatal only when they touch an import statement or
        the docblock. A bracket left open is always fatal.
        """
        fatal = self._unrecoverable_error(root, errors, statements)
        line, column = error_position(fatal if fatal is not None else errors[0])
        if fatal is None:
            logger.debug(
                f"{file_path}: {len(errors)} recovered syntax error(s) outside imports, first at {line}:{column}"
            )
            return
        if not self.config.tolerate_syntax_errors:
            raise ParseError(
                file_path,
                f"{len(errors)} syntax error(s) for dialect '{self.config.dialect}'",
                line,
                column,
            )
        logger.warning(
            f"{file_path}: {len(errors)} recovered syntax error(s), first unrecoverable at {line}:{column}"
        )

    def _unrecoverable_error(self, root, errors, statements):
        for statement in statements:
            if statement.has_error:
                return next((e for e in errors if _within(e, statement)), errors[0])
        for error in errors:
            for child in error.children:
                if child.type == "import":
                    return error
                if child.type == COMMENT_NODE_TYPE and self.config.strict_marker in child.text.decode("utf-8", "replace"):
                    return error
        if has_unbalanced_delimiters(root):
            return errors[-1]
        return None

    def _rewrite_imports(self, statements, splices: List[Splice], file_path: str) -> List[ImportEdit]:
        edits: List[ImportEdit] = []
        for index, statement in enumerate(statements):
            if statement.has_error:
                logger.debug(f"{file_path}: skipping import with syntax errors on line {statement.start_point[0] + 1}")
                continue

            source_node = import_source_node(statement)
            if source_node is None or source_node.type != STRING_NODE_TYPE:
                continue

            value = string_value(source_node)
            if value not in self.mapping:
                continue
            replacement = self.mapping[value]
            if replacement == value:
                continue

            rendered = render_string(replacement, quote_char(source_node))
            splices.append((source_node.start_byte, source_node.end_byte, rendered.encode("utf-8")))
            edits.append(
                ImportEdit(
                    original=value,
                    replacement=replacement,
                    line=source_node.start_point[0] + 1,
                    statement_index=index,
                    start_byte=source_node.start_byte,
                    end_byte=source_node.end_byte,
                )
            )
        return edits

    def _annotate_docblock(self, root, splices: List[Splice]) -> Optional[DocblockEdit]:
        docblock = find_docblock(root)
        if docblock is None:
            return None

        annotated = annotate_docblock(docblock.text.decode("utf-8"), self.config)
        if annotated is None:
            return None

        new_comment, marker_indexes, inserted = annotated
        first_line = docblock.start_point[0] + 1
        splices.append((docblock.start_byte, docblock.end_byte, new_comment.encode("utf-8")))
        return DocblockEdit(
            marker_lines=[first_line + i for i in marker_indexes],
            inserted=inserted,
        )


def rewrite(
    source: str,
    mapping: Mapping[str, str],
    config: Optional[RewriteConfig] = None,
    file_path: str = "<source>",
) -> RewriteResult:
    """Rewrite one source text with a mapping. See RewriteEngine.rewrite."""
    return RewriteEngine(mapping, config).rewrite(source, file_path=file_path)
