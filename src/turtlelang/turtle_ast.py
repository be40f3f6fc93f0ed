"""
Defines the abstract syntax tree (AST) node structure for the turtle language.

Classes:
    ASTNode:
        One node of the parsed program. A single class covers every construct,
        distinguished by `kind`.

    ASTDict:
        TypedDict shape produced by `ASTNode.to_dict()`, suitable for JSON output.

Node layout by kind:

    kind         value              children        params
    ----------   ----------------   -------------   ---------------
    forward      amount node        -               -
    back         amount node        -               -
    right        amount node        -               -
    left         amount node        -               -
    repeat       count node         body            -
    to           identifier node    body            variable nodes
    call         identifier node    arguments       -
    number       int                -               -
    identifier   str                -               -
    variable     str (with sigil)   -               -

`str(node)` renders constructor notation, e.g.
`Repeat(Number(4), [Forward(Number(10)), Right(Number(90))])`.
"""

from typing import Any, TypedDict, Union

DIRECTION_KINDS = ("forward", "back", "right", "left")


class ASTDict(TypedDict, total=False):
    """
    Serialized form of an ASTNode.

    Fields:
        kind (str): Node kind (e.g. "repeat", "call").
        value (Any): Leaf payload or the serialized head node.
        line (int): Source line of the node's first token.
        col (int): Source column of the node's first token.
        params (list[ASTDict]): Procedure parameters.
        children (list[ASTDict]): Block body or call arguments.
    """

    kind: str
    value: Any
    line: int
    col: int
    params: list["ASTDict"]
    children: list["ASTDict"]


class ASTNode:
    """
    A node in the turtle program tree.

    Args:
        kind (str): The construct (see module docstring for the full table).
        value (Union[int, str, ASTNode], optional): Leaf payload or head node.
        children (list[ASTNode], optional): Body statements or call arguments.
        params (list[ASTNode], optional): Parameter variables of a `to` definition.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).
    """

    def __init__(
        self,
        kind: str,
        value: Union[int, str, "ASTNode"] | None = None,
        children: list["ASTNode"] | None = None,
        params: list["ASTNode"] | None = None,
        line: int = 0,
        col: int = 0,
    ):
        self.kind = kind
        self.value = value
        self.children: list["ASTNode"] = children or []
        self.params: list["ASTNode"] = params or []
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.params:
            parts.append(f"params={self.params!r}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __str__(self) -> str:
        return format_node(self)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.params == other.params
            and self.children == other.children
        )

    def to_dict(self) -> ASTDict:
        val: Any = self.value
        if isinstance(val, ASTNode):
            val = val.to_dict()

        return {
            "kind": self.kind,
            "value": val,
            "line": self.line,
            "col": self.col,
            "params": [p.to_dict() for p in self.params],
            "children": [c.to_dict() for c in self.children],
        }


def format_node(node: ASTNode) -> str:
    """Renders a node in constructor notation."""

    def seq(nodes: list[ASTNode]) -> str:
        return "[" + ", ".join(format_node(n) for n in nodes) + "]"

    head = format_node(node.value) if isinstance(node.value, ASTNode) else ""

    if node.kind == "number":
        return f"Number({node.value})"
    if node.kind == "identifier":
        return f'Identifier("{node.value}")'
    if node.kind == "variable":
        return f'Variable("{node.value}")'
    if node.kind in DIRECTION_KINDS:
        return f"{node.kind.capitalize()}({head})"
    if node.kind == "repeat":
        return f"Repeat({head}, {seq(node.children)})"
    if node.kind == "to":
        return f"ProcedureDef({head}, {seq(node.params)}, {seq(node.children)})"
    if node.kind == "call":
        return f"Call({head}, {seq(node.children)})"
    return repr(node)


def format_program(nodes: list[ASTNode]) -> str:
    return "[" + ", ".join(format_node(n) for n in nodes) + "]"


# Constructors mirroring the notation above.


def number(value: int, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode("number", value, line=line, col=col)


def identifier(text: str, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode("identifier", text, line=line, col=col)


def variable(text: str, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode("variable", text, line=line, col=col)


def direction(kind: str, amount: ASTNode, line: int = 0, col: int = 0) -> ASTNode:
    if kind not in DIRECTION_KINDS:
        raise ValueError(f"Unknown direction: {kind}")
    return ASTNode(kind, amount, line=line, col=col)


def repeat(count: ASTNode, body: list[ASTNode], line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode("repeat", count, children=body, line=line, col=col)


def procedure(
    name: ASTNode,
    params: list[ASTNode],
    body: list[ASTNode],
    line: int = 0,
    col: int = 0,
) -> ASTNode:
    return ASTNode("to", name, children=body, params=params, line=line, col=col)


def call(name: ASTNode, args: list[ASTNode], line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode("call", name, children=args, line=line, col=col)
