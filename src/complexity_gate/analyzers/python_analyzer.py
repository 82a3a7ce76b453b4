"""Python language analyzer"""

import ast
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..exceptions import FileAccessError, ParsingError
from ..logging_config import get_logger
from ..models import MetricRecord, UnitKind
from .base import BaseScanner, Entry

logger = get_logger(__name__)

FUNCTION_NODES = (ast.FunctionDef, ast.AsyncFunctionDef)
SCOPE_NODES = FUNCTION_NODES + (ast.Lambda, ast.ClassDef)

# Statements that open a nested block
BLOCK_NODES: tuple = (
    ast.If,
    ast.For,
    ast.AsyncFor,
    ast.While,
    ast.With,
    ast.AsyncWith,
    ast.Try,
)
if hasattr(ast, "Match"):
    BLOCK_NODES += (ast.Match,)
if hasattr(ast, "TryStar"):
    BLOCK_NODES += (ast.TryStar,)

# Nodes that each add one independent path
BRANCH_NODES = (
    ast.If,
    ast.IfExp,
    ast.For,
    ast.AsyncFor,
    ast.While,
    ast.ExceptHandler,
    ast.Assert,
    ast.comprehension,
)


class PythonScanner(BaseScanner):
    """Scanner producing function and file records for Python sources"""

    def __init__(
        self,
        root_dir: Union[str, Path],
        exclude_patterns: Optional[Sequence[str]] = None,
        anchor: Optional[Union[str, Path]] = None,
    ):
        super().__init__(
            root_dir, extensions=[".py"], exclude_patterns=exclude_patterns, anchor=anchor
        )

    def _analyze_file(self, filepath: Path) -> List[Entry]:
        """Extract one record per function plus one for the file"""
        try:
            with open(filepath, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            raise FileAccessError(filepath, e.strerror or str(e))

        try:
            tree = ast.parse(content, filename=str(filepath))
        except (SyntaxError, ValueError) as e:
            raise ParsingError(filepath, "python", str(e), line=getattr(e, "lineno", None))

        rel_path = self._relative(filepath)
        records: List[Entry] = []
        for qualname, node in _iter_functions(tree):
            records.append(
                MetricRecord(
                    name=qualname,
                    path=rel_path,
                    kind=UnitKind.FUNCTION,
                    measurements=function_metrics(node),
                    line=node.lineno,
                )
            )

        file_total = sum(r.measurements["cyclomatic"] for r in records)
        records.append(
            MetricRecord(
                name=rel_path,
                path=rel_path,
                kind=UnitKind.FILE,
                # "functions" has no threshold; it is informational only
                measurements={"file_total": file_total, "functions": len(records)},
            )
        )
        logger.debug(f"{rel_path}: {len(records) - 1} functions, total complexity {file_total}")
        return records


def function_metrics(node: Union[ast.FunctionDef, ast.AsyncFunctionDef]) -> dict:
    """Measure a single function definition."""
    body = list(_own_nodes(node))
    return {
        "cyclomatic": cyclomatic_complexity(body),
        "nesting_depth": nesting_depth(node),
        "callback_depth": callback_depth(node),
        "lines": (node.end_lineno or node.lineno) - node.lineno + 1,
        "params": parameter_count(node),
    }


def cyclomatic_complexity(nodes) -> int:
    """1 + decision points (branches, handlers, boolean operands, match cases)."""
    complexity = 1
    for child in nodes:
        if isinstance(child, BRANCH_NODES):
            complexity += 1
            if isinstance(child, ast.comprehension):
                complexity += len(child.ifs)
        elif isinstance(child, ast.BoolOp):
            complexity += len(child.values) - 1
        elif hasattr(ast, "match_case") and isinstance(child, ast.match_case):
            complexity += 1
    return complexity


def nesting_depth(node: ast.AST) -> int:
    """Deepest chain of nested blocks inside a function body."""

    def depth(n: ast.AST, level: int) -> int:
        deepest = level
        for child in ast.iter_child_nodes(n):
            if isinstance(child, SCOPE_NODES):
                continue
            if isinstance(child, BLOCK_NODES) and not _is_elif(n, child):
                deepest = max(deepest, depth(child, level + 1))
            else:
                deepest = max(deepest, depth(child, level))
        return deepest

    return depth(node, 0)


def callback_depth(node: ast.AST) -> int:
    """Deepest chain of functions and lambdas defined inside a function."""
    deepest = 0
    for child in ast.iter_child_nodes(node):
        if isinstance(child, FUNCTION_NODES + (ast.Lambda,)):
            deepest = max(deepest, 1 + callback_depth(child))
        elif not isinstance(child, ast.ClassDef):
            deepest = max(deepest, callback_depth(child))
    return deepest


def parameter_count(node: Union[ast.FunctionDef, ast.AsyncFunctionDef]) -> int:
    """Declared parameters, not counting a leading self/cls."""
    args = node.args
    params = [*args.posonlyargs, *args.args, *args.kwonlyargs]
    count = len(params) + (args.vararg is not None) + (args.kwarg is not None)
    if params and params[0].arg in ("self", "cls"):
        count -= 1
    return count


def _iter_functions(tree: ast.AST, prefix: str = ""):
    """Yield (qualname, node) for every function, including nested ones and methods."""
    for child in ast.iter_child_nodes(tree):
        if isinstance(child, FUNCTION_NODES):
            qualname = f"{prefix}{child.name}"
            yield qualname, child
            yield from _iter_functions(child, f"{qualname}.")
        elif isinstance(child, ast.ClassDef):
            yield from _iter_functions(child, f"{prefix}{child.name}.")
        else:
            yield from _iter_functions(child, prefix)


def _own_nodes(node: ast.AST):
    """Walk a function body without entering nested functions or classes.

    Lambdas are walked: their branches belong to the enclosing function.
    """
    stack = list(ast.iter_child_nodes(node))
    while stack:
        child = stack.pop()
        if isinstance(child, FUNCTION_NODES + (ast.ClassDef,)):
            continue
        yield child
        stack.extend(ast.iter_child_nodes(child))


def _is_elif(parent: ast.AST, child: ast.AST) -> bool:
    return (
        isinstance(parent, ast.If)
        and isinstance(child, ast.If)
        and len(parent.orelse) == 1
        and parent.orelse[0] is child
    )
