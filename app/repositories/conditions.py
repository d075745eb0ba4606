"""동적 검색 조건 조합기 — 선택적 검색 조건을 단일 WHERE 조건으로 결합.

Dynamic predicate composer — Combines optional search criteria into one
SQLAlchemy boolean expression for a query's WHERE clause.

Each criterion maps a search field to a mapped column and a comparison.
A criterion whose value is None is "unspecified" and contributes no
constraint; empty strings and 0 are specified values and do filter.
Absent predicates are skipped before combination, so AND is never
applied to a missing operand.

Usage:
    composer = PredicateComposer([
        Criterion("username", Member.username),
        Criterion("age", Member.age),
    ])
    query = select(Member).where(composer.compose(condition))
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy import ColumnElement, and_, true

# 비교 연산자 타입 — (컬럼, 값) -> 불리언 표현식 (Comparison: (column, value) -> boolean expression)
Operator = Callable[[Any, Any], ColumnElement[bool]]


def eq(column: Any, value: Any) -> ColumnElement[bool]:
    """동등 비교 — column = value."""
    return column == value


def goe(column: Any, value: Any) -> ColumnElement[bool]:
    """이상 비교 — column >= value."""
    return column >= value


def loe(column: Any, value: Any) -> ColumnElement[bool]:
    """이하 비교 — column <= value."""
    return column <= value


def predicate_for(
    column: Any,
    value: Any,
    operator: Operator = eq,
) -> ColumnElement[bool] | None:
    """단일 검색 값에 대한 조건을 생성합니다.

    Build the predicate for one optional search value.

    Args:
        column: 비교 대상 매핑 컬럼 (Mapped column attribute)
        value: 검색 값, None이면 미지정 (Search value; None means unspecified)
        operator: 비교 연산자, 기본 동등 비교 (Comparison, equality by default)

    Returns:
        ColumnElement[bool] | None: 조건 또는 미지정 시 None
            (The predicate, or None when the value is unspecified)
    """
    if value is None:
        return None
    return operator(column, value)


def and_all(*predicates: ColumnElement[bool] | None) -> ColumnElement[bool]:
    """존재하는 조건만 AND로 결합합니다.

    Fold predicates with AND, treating None as the identity element.
    No present predicate yields the always-true sentinel so the query
    stays unfiltered; a single predicate is returned unchanged.

    Args:
        *predicates: 결합할 조건들, None은 건너뜀 (Predicates; None entries are skipped)

    Returns:
        ColumnElement[bool]: 결합된 조건 (Combined predicate)
    """
    present: list[ColumnElement[bool]] = [p for p in predicates if p is not None]
    if not present:
        return true()
    if len(present) == 1:
        return present[0]
    return and_(*present)


@dataclass(frozen=True)
class Criterion:
    """검색 필드와 컬럼/비교 연산자의 바인딩.

    Binding of a search field name to a mapped column and comparison.

    Attributes:
        field_name: 검색 조건 객체의 필드명 (Field name on the search condition)
        column: 비교 대상 매핑 컬럼 (Mapped column attribute)
        operator: 비교 연산자 (Comparison operator, equality by default)
    """

    field_name: str
    column: Any
    operator: Operator = eq


class PredicateComposer:
    """검색 조건 객체를 단일 WHERE 조건으로 변환하는 조합기.

    Stateless composer turning a search condition into a single predicate.
    Criteria are evaluated in declaration order; the order is fixed so the
    generated SQL is stable, while the filtered result does not depend on it.

    Attributes:
        criteria: 선언 순서대로의 검색 조건 목록 (Criteria in declaration order)
    """

    def __init__(self, criteria: Sequence[Criterion]) -> None:
        self.criteria: tuple[Criterion, ...] = tuple(criteria)
        self._by_name: dict[str, Criterion] = {c.field_name: c for c in self.criteria}
        if len(self._by_name) != len(self.criteria):
            raise ValueError("Duplicate search field in criteria")

    @property
    def field_names(self) -> list[str]:
        return [c.field_name for c in self.criteria]

    def predicate_for(self, field_name: str, value: Any) -> ColumnElement[bool] | None:
        """이름으로 지정한 필드의 조건을 생성합니다.

        Build the predicate for the named field, or None if value is unspecified.

        Raises:
            ValueError: 등록되지 않은 필드명 (Unknown field name)
        """
        criterion: Criterion | None = self._by_name.get(field_name)
        if criterion is None:
            raise ValueError(f"Unknown search field: {field_name}")
        return predicate_for(criterion.column, value, criterion.operator)

    def predicates(
        self, condition: BaseModel | Mapping[str, Any] | None
    ) -> list[ColumnElement[bool]]:
        """지정된 값이 있는 필드의 조건 목록을 반환합니다.

        Return the predicates of the specified fields, in declaration order.
        Suitable for ``select(...).where(*predicates)``.
        """
        if condition is None:
            return []
        result: list[ColumnElement[bool]] = []
        for criterion in self.criteria:
            predicate = predicate_for(
                criterion.column,
                _value_of(condition, criterion.field_name),
                criterion.operator,
            )
            if predicate is not None:
                result.append(predicate)
        return result

    def compose(self, condition: BaseModel | Mapping[str, Any] | None) -> ColumnElement[bool]:
        """검색 조건 객체 전체를 하나의 조건으로 결합합니다.

        Combine every specified field of the condition with AND.
        Returns the always-true sentinel when nothing is specified.
        """
        return and_all(*self.predicates(condition))


def _value_of(condition: BaseModel | Mapping[str, Any], field_name: str) -> Any:
    """조건 객체에서 필드 값을 꺼냅니다.

    Read a field from a mapping or a pydantic condition. A missing mapping
    key is unspecified; a field the condition model does not declare is an
    error, so a misspelled criterion never silently stops filtering.

    Raises:
        ValueError: 조건 모델에 없는 필드 (Field not declared by the condition model)
    """
    if isinstance(condition, Mapping):
        return condition.get(field_name)
    if isinstance(condition, BaseModel):
        if field_name not in type(condition).model_fields:
            raise ValueError(
                f"Unknown search field for {type(condition).__name__}: {field_name}"
            )
        return getattr(condition, field_name)
    if not hasattr(condition, field_name):
        raise ValueError(f"Unknown search field: {field_name}")
    return getattr(condition, field_name)
