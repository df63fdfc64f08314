"""Token categories reported by the classification passes.

The classifier tags each text range with one Category. The numeric value
of every member matches the ordinal the classifier sends on the wire, and
doubles as render priority: when ranges of two categories overlap, the
lower ordinal is the one that shows.

Categories are organized in two groups:
- Lexical kinds produced by the syntactic pass (comments, keywords, ...)
- Semantic kinds produced by the semantic pass (types, functions, ...)

Thread Safety:
Category is an enum (inherently immutable).

"""

from enum import IntEnum


class Category(IntEnum):
    """Token kinds, in wire order."""

    # Syntactic/lexical tokens
    IDENTIFIER = 0
    COMMENT = 1
    KEYWORD = 2
    PREPROCESSOR_KEYWORD = 3
    OPERATOR = 4
    VARIABLE = 5
    NUMBER_LITERAL = 6
    STRING_LITERAL = 7
    XML_DOC_COMMENT = 8
    XML_DOC_TAG = 9

    # Semantic tokens
    MACRO = 10
    ENUMERATOR = 11
    GLOBAL_VARIABLE = 12
    LOCAL_VARIABLE = 13
    PARAMETER = 14
    TYPE = 15
    REF_TYPE = 16
    VALUE_TYPE = 17
    FUNCTION = 18
    MEMBER_FUNCTION = 19
    MEMBER_FIELD = 20
    STATIC_MEMBER_FUNCTION = 21
    STATIC_MEMBER_FIELD = 22
    PROPERTY = 23
    EVENT = 24
    CLASS_TEMPLATE = 25
    GENERIC_TYPE = 26
    FUNCTION_TEMPLATE = 27
    NAMESPACE = 28
    LABEL = 29
    UDL_RAW = 30
    UDL_NUMBER = 31
    UDL_STRING = 32
    OPERATOR_FUNCTION = 33
    MEMBER_OPERATOR = 34
    NEW_DELETE = 35

    @property
    def scope(self) -> str:
        """TextMate scope a style resolver looks up for this category."""
        return CATEGORY_SCOPES[self]

    @classmethod
    def lookup(cls, key: "int | str | Category") -> "Category | None":
        """Find a category by ordinal or name, or None if unknown.

        Names are matched case-insensitively, in either ``MEMBER_FIELD`` or
        ``MemberField`` spelling.
        """
        if isinstance(key, cls):
            return key
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            try:
                return cls(key)
            except ValueError:
                return None
        if isinstance(key, str):
            return _NAME_INDEX.get(key.replace("_", "").lower())
        return None


CATEGORY_COUNT = len(Category)

# Most general scope first; resolvers cascade through dotted prefixes.
CATEGORY_SCOPES: dict[Category, str] = {
    Category.IDENTIFIER: "entity.name",
    Category.COMMENT: "comment",
    Category.KEYWORD: "keyword.control",
    Category.PREPROCESSOR_KEYWORD: "keyword.control.directive",
    Category.OPERATOR: "keyword.operator",
    Category.VARIABLE: "variable",
    Category.NUMBER_LITERAL: "constant.numeric",
    Category.STRING_LITERAL: "string.quoted",
    Category.XML_DOC_COMMENT: "comment.xml.doc",
    Category.XML_DOC_TAG: "comment.xml.doc.tag",
    Category.MACRO: "entity.name.function.preprocessor",
    Category.ENUMERATOR: "variable.other.enummember",
    Category.GLOBAL_VARIABLE: "variable.other.global",
    Category.LOCAL_VARIABLE: "variable.other.local",
    Category.PARAMETER: "variable.parameter",
    Category.TYPE: "entity.name.type",
    Category.REF_TYPE: "entity.name.class.reference",
    Category.VALUE_TYPE: "entity.name.class.value",
    Category.FUNCTION: "entity.name.function",
    Category.MEMBER_FUNCTION: "entity.name.function.member",
    Category.MEMBER_FIELD: "variable.other.member",
    Category.STATIC_MEMBER_FUNCTION: "entity.name.function.member.static",
    Category.STATIC_MEMBER_FIELD: "variable.other.member.static",
    Category.PROPERTY: "variable.other.property",
    Category.EVENT: "variable.other.event",
    Category.CLASS_TEMPLATE: "entity.name.class.template",
    Category.GENERIC_TYPE: "entity.name.class.generic",
    Category.FUNCTION_TEMPLATE: "entity.name.function.template",
    Category.NAMESPACE: "entity.name.namespace",
    Category.LABEL: "entity.name.label",
    Category.UDL_RAW: "entity.name.user-defined-literal",
    Category.UDL_NUMBER: "entity.name.user-defined-literal.number",
    Category.UDL_STRING: "entity.name.user-defined-literal.string",
    Category.OPERATOR_FUNCTION: "entity.name.function.operator",
    Category.MEMBER_OPERATOR: "keyword.operator.member",
    Category.NEW_DELETE: "keyword.operator.new",
}

_NAME_INDEX: dict[str, Category] = {
    member.name.replace("_", "").lower(): member for member in Category
}


__all__ = [
    "CATEGORY_COUNT",
    "CATEGORY_SCOPES",
    "Category",
]
