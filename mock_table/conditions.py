"""
Condition grammar and the loose-shape adapter.

Internally a condition is a tagged union of two pydantic models:

  - ``ConditionLeaf``   — ``{field, value, type?, required, like}``
  - ``ConditionBranch`` — ``{logic: AND|OR, conditions: [node, …]}``

Callers (and the HTTP layer) usually send the looser external shape, where
a leaf is a dict holding exactly one field entry plus optional modifiers::

    {"name": "user2", "like": True}
    {"id": "5", "type": "number", "required": True}
    {"logic": "OR", "conditions": [{"role": "guest"}, {"status": "active"}]}

``build_condition_tree`` translates that shape into the models.  A flat
list of leaves becomes a single AND branch.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mock_table.errors import InvalidConditionShape

LEAF_MODIFIERS = frozenset({"type", "required", "like"})
BRANCH_KEYS = frozenset({"logic", "conditions"})

LOGIC_AND = "AND"
LOGIC_OR = "OR"

ConditionType = Literal["string", "number", "boolean"]


# ---------------------- MODELS ----------------------


class ConditionLeaf(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str = Field(min_length=1)
    value: Any = None
    type: Optional[ConditionType] = None
    required: bool = False
    like: bool = False


class ConditionBranch(BaseModel):
    model_config = ConfigDict(frozen=True)

    logic: Literal["AND", "OR"] = LOGIC_AND
    conditions: List[Union[ConditionLeaf, "ConditionBranch"]] = Field(default_factory=list)

    @field_validator("logic", mode="before")
    @classmethod
    def _upper_logic(cls, value: Any) -> Any:
        if value is None:
            return LOGIC_AND
        if isinstance(value, str):
            return value.strip().upper()
        return value


ConditionBranch.model_rebuild()

ConditionNode = Union[ConditionLeaf, ConditionBranch]


# ---------------------- ADAPTER ----------------------


def leaf_from_item(item: Dict[str, Any]) -> ConditionLeaf:
    """Build a ``ConditionLeaf`` from the loose ``{field: value, …modifiers}`` shape.

    Raises ``InvalidConditionShape`` when the dict has no field entry, more
    than one, or malformed modifiers.
    """
    keys = [k for k in item.keys() if k not in LEAF_MODIFIERS]
    if not keys:
        raise InvalidConditionShape("invalid item key", keys)
    if len(keys) > 1:
        raise InvalidConditionShape(
            f"condition item must have exactly one field, got {keys}", keys,
        )

    field = keys[0]
    try:
        return ConditionLeaf(
            field=field,
            value=item[field],
            type=item.get("type"),
            required=item.get("required") or False,
            like=item.get("like") or False,
        )
    except ValidationError as e:
        raise InvalidConditionShape(f"invalid condition for '{field}': {e}", keys) from e


def branch_from_item(item: Dict[str, Any]) -> ConditionBranch:
    extra = [k for k in item.keys() if k not in BRANCH_KEYS]
    if extra:
        raise InvalidConditionShape(
            f"condition group has unexpected keys {extra}", extra,
        )
    children = item.get("conditions")
    if children is None:
        children = []
    if not isinstance(children, (list, tuple)):
        raise InvalidConditionShape("'conditions' must be a list")
    try:
        return ConditionBranch(
            logic=item.get("logic"),
            conditions=[to_node(child) for child in children],
        )
    except ValidationError as e:
        raise InvalidConditionShape(f"invalid condition group: {e}") from e


def to_node(item: Any) -> ConditionNode:
    """Translate one loose condition (dict, list or model) into a node."""
    if isinstance(item, (ConditionLeaf, ConditionBranch)):
        return item
    if isinstance(item, (list, tuple)):
        return ConditionBranch(logic=LOGIC_AND, conditions=[to_node(c) for c in item])
    if isinstance(item, dict):
        if "conditions" in item:
            return branch_from_item(item)
        return leaf_from_item(item)
    raise InvalidConditionShape(
        f"condition must be a dict or a list, got {type(item).__name__}"
    )


def build_condition_tree(conditions: Any) -> Optional[ConditionNode]:
    """Normalise caller-supplied conditions into a condition tree.

    ``None`` stays ``None`` (no filtering).  A list becomes an AND branch,
    a dict becomes a leaf or a branch, models pass through unchanged.
    """
    if conditions is None:
        return None
    return to_node(conditions)


def iter_leaves(node: ConditionNode):
    """Yield every leaf of ``node`` depth-first, in declaration order."""
    if isinstance(node, ConditionLeaf):
        yield node
        return
    for child in node.conditions:
        yield from iter_leaves(child)
