"""Documentation generator for parameter schemas.

First we generate a tree from the schema using build_tree, then we convert that tree into an HTML
table using output_as_table, or into indented text with output_as_text. Object parameters are
expanded into their fields, so the table shows the structure of the document the schema describes.
"""
from typing import List, Optional, Tuple

from jinja2 import Environment

from xmlparams.parameters.schema import ParamsSchema
from xmlparams.parameters.spec import ParamSpec
from xmlparams.serializers.array import ArraySerializer
from xmlparams.serializers.base import Serializer
from xmlparams.serializers.objects import ObjectSerializer


class TreeNode:
    name: str
    column: int
    rowspan: int
    row: int
    children: List['TreeNode']
    desc: Optional[str]
    optional: bool
    parent: Optional['TreeNode']

    def __init__(self, name: str, desc: Optional[str], optional: bool):
        self.name = name
        self.desc = desc
        self.optional = optional
        self.children = []
        self.row = -1
        self.column = -1
        self.rowspan = -1
        self.parent = None

    def add(self, child: 'TreeNode'):
        self.children.append(child)
        child.parent = self

    def walk(self):
        """Yield the nodes depth-first, with their depth"""
        def _walk(node, depth):
            yield node, depth
            for c in node.children:
                yield from _walk(c, depth + 1)
        return _walk(self, 0)

    def __str__(self):
        return f"TreeNode({self.name}, row {self.row}, span {self.rowspan})"


def build_tree(schema: ParamsSchema) -> TreeNode:
    """Given a schema, build a tree of TreeNode objects."""
    root = TreeNode(schema.name, f"version {schema.version}", False)
    for spec in schema:
        root.add(build_tree_from_spec(spec))
    return root


def build_tree_from_spec(spec: ParamSpec) -> TreeNode:
    desc = spec.description or ""
    if not spec.required:
        d = f"default {spec.serializer.describe(spec.default)}"
        desc = f"{desc} ({d})" if desc else d
    return build_tree_from_serializer(spec.key, spec.serializer, desc, not spec.required)


def build_tree_from_serializer(name: str, ser: Serializer, desc: Optional[str], optional: bool) -> TreeNode:
    """Build the node for a value handled by a serializer - used from build_tree_from_spec and recursively
    for object fields"""
    if isinstance(ser, ObjectSerializer):
        root = TreeNode(f"{name}: {ser.type_name}", desc, optional)
        for k, field_ser in ser.fields.items():
            root.add(build_tree_from_serializer(k, field_ser, None, False))
    elif isinstance(ser, ArraySerializer):
        root = TreeNode(f"{name}: list of {ser.component.type_name}", desc, optional)
    else:
        root = TreeNode(f"{name}: {ser.type_name}", desc, optional)
    return root


def calculate_positions(root: TreeNode) -> Tuple[int, int]:
    """Give each node its table cell: the column is its depth, it starts on the row after its previous
    sibling's rows, and it spans as many rows as it has leaves below it (at least one). Returns the
    largest row and column used."""

    def _place(node: TreeNode, row: int, column: int) -> int:
        node.row = row
        node.column = column
        next_row = row
        for child in node.children:
            next_row += _place(child, next_row, column + 1)
        node.rowspan = max(next_row - row, 1)
        return node.rowspan

    _place(root, 0, 0)
    cells = [(n.row, n.column) for n, _ in root.walk()]
    return max(r for r, _ in cells), max(c for _, c in cells)


TABLE_TEMPLATE = """<table border='1' style='border-collapse: collapse;'>
{%- for row in rows %}
<tr>
{%- for node in row %}<td rowspan="{{ node.rowspan }}" style="border-right: none;">{{ node.name }}{% if node.optional %} (optional){% endif %}</td>
{%- if node.desc %}<td rowspan="{{ node.rowspan }}" style="border-left: none;">{{ node.desc }}</td>{% endif %}
{%- endfor %}</tr>
{%- endfor %}
</table>
"""

_env = Environment(autoescape=True)


def output_as_table(root: TreeNode) -> str:
    """Render the tree as an HTML table, in which each node spans the rows of its descendants"""
    max_row, _ = calculate_positions(root)
    rows = [[] for _ in range(max_row + 1)]
    # depth-first order gives the nodes of each row from left to right
    for node, _ in root.walk():
        rows[node.row].append(node)
    return _env.from_string(TABLE_TEMPLATE).render(rows=rows)


def output_as_text(root: TreeNode, indent: int = 4) -> str:
    """Render the tree as indented text, one node per line"""
    lines = []
    for node, depth in root.walk():
        s = " " * (indent * depth) + node.name
        if node.optional:
            s += " (optional)"
        if node.desc:
            s += f" - {node.desc}"
        lines.append(s)
    return "\n".join(lines)


def generate_schema_documentation(schema: ParamsSchema, html: bool = True) -> str:
    """Generate documentation for a schema, as HTML or as text."""
    root = build_tree(schema)
    return output_as_table(root) if html else output_as_text(root)
