"""
repositories/predicates.py
--------------------------
Builds parameterized WHERE clauses from partial search filters.

A clause is collected as an ordered list of (column, operator, value)
conditions and only turned into SQL text by `WhereClause.render()`.
Columns come from fixed allow-lists below; values are never written into
the statement text, they travel as bound parameters.
"""

from dataclasses import dataclass, field

from db.errors import EmptyFilterError
from models.filters import IngredientFilter, RecipeFilter

_OPERATORS = {"="}

# (filter field, column), in the order conditions are emitted
INGREDIENT_FILTER_COLUMNS: tuple[tuple[str, str], ...] = (
    ("name", "ingredient_name"),
    ("category", "category"),
)

RECIPE_FILTER_COLUMNS: tuple[tuple[str, str], ...] = (
    ("user_id", "user_uuid"),
    ("name", "recipe_name"),
    ("category", "category"),
)


@dataclass(frozen=True)
class Condition:
    column: str
    operator: str
    value: object


@dataclass
class WhereClause:
    """Ordered conditions joined with AND."""

    conditions: list[Condition] = field(default_factory=list)

    def add(self, column: str, value: object, operator: str = "=") -> "WhereClause":
        if operator not in _OPERATORS:
            raise ValueError(f"unsupported operator: {operator!r}")
        self.conditions.append(Condition(column, operator, value))
        return self

    def __len__(self) -> int:
        return len(self.conditions)

    def render(self, style: str = "pyformat") -> tuple[str, list]:
        """
        Render the clause for a driver's placeholder syntax.

        Args:
            style: 'pyformat' for psycopg2 (``%s``) or 'numeric' (``$1``, ``$2``...).

        Returns:
            (clause_text, args) where args[i] binds the i-th placeholder.

        Raises:
            EmptyFilterError: The clause has no conditions.
        """
        if style not in ("pyformat", "numeric"):
            raise ValueError(f"unsupported placeholder style: {style!r}")
        if not self.conditions:
            raise EmptyFilterError("render where clause")

        parts: list[str] = []
        args: list = []
        for cond in self.conditions:
            args.append(cond.value)
            # placeholder index always equals len(args)
            placeholder = "%s" if style == "pyformat" else f"${len(args)}"
            parts.append(f"{cond.column} {cond.operator} {placeholder}")
        return " AND ".join(parts), args


def build_predicate(
    search_filter, columns: tuple[tuple[str, str], ...], operation: str
) -> WhereClause:
    """
    Turn a filter record into a WhereClause using exact-match conditions.

    Raises:
        EmptyFilterError: No field of the filter is set.
    """
    clause = WhereClause()
    for attr, column in columns:
        value = getattr(search_filter, attr)
        if value is not None:
            clause.add(column, value)
    if not clause:
        raise EmptyFilterError(operation)
    return clause


def build_ingredient_predicate(search_filter: IngredientFilter) -> WhereClause:
    return build_predicate(search_filter, INGREDIENT_FILTER_COLUMNS, "search ingredients")


def build_recipe_predicate(search_filter: RecipeFilter) -> WhereClause:
    return build_predicate(search_filter, RECIPE_FILTER_COLUMNS, "search recipes")
