"""Required-field validation for page drafts.

Validation is a pure function of the draft: rules are evaluated in a fixed
order and each failing rule contributes exactly one message, so the error
list is stable for the same input.
"""

from typing import Any, Callable, List, Mapping, NamedTuple, Sequence, Union

from src.models.page import Page

PageLike = Union[Page, Mapping[str, Any]]


class Rule(NamedTuple):
    """A single required-field rule.

    Attributes:
        field: Name of the checked field (for reference in messages and tests)
        check: Returns True when the page satisfies the rule
        message: Human-readable error reported when the check fails
    """
    field: str
    check: Callable[[Page], bool]
    message: str


def _has_filename(page: Page) -> bool:
    return bool((page.name or '').strip() or (page.path or '').strip())


def required_metadata(key: str, message: str) -> Rule:
    """Build a rule requiring a non-empty front matter key."""
    def check(page: Page) -> bool:
        value = page.metadata.get(key)
        if isinstance(value, str):
            return bool(value.strip())
        return value is not None

    return Rule(field=key, check=check, message=message)


DEFAULT_RULES = (
    Rule(field='filename', check=_has_filename, message="The filename is required."),
)


class Validator:
    """Ordered set of required-field rules.

    Example:
        >>> validator = Validator(DEFAULT_RULES + (
        ...     required_metadata('title', "The title is required."),
        ... ))
        >>> validator.validate({'path': 'about.md'})
        ['The title is required.']
    """

    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES):
        self._rules = tuple(rules)

    @property
    def rules(self):
        return self._rules

    def validate(self, page: PageLike) -> List[str]:
        """Return the error messages for a draft, empty when valid.

        Args:
            page: A Page or a flattened editor snapshot mapping
        """
        if not isinstance(page, Page):
            page = Page.from_metadata(page)
        return [rule.message for rule in self._rules if not rule.check(page)]


_default_validator = Validator()


def validate_page(page: PageLike) -> List[str]:
    """Validate a draft against the default rules."""
    return _default_validator.validate(page)
