"""
================================================================================
Smart Locator with Fallback Selector Chains
================================================================================

Element references and fallback-aware location:
    - ElementRef: lazy, immutable description of one element
    - SmartLocator: resolves an ElementRef to a visible Playwright Locator,
      trying fallback selectors in order
    - LocatorHealth: records which elements needed a fallback

An ElementRef never holds a DOM node. Every operation builds a fresh
Locator from the page, so references stay valid across navigations.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class ElementTimeoutError(TimeoutError):
    """
    Raised when an element does not reach the expected state in time.

    Attributes:
        selector: Selector (or description) of the element
        timeout: Bound that was exceeded, in milliseconds
        action: Operation that was waiting
        attempts: Selectors tried, in order
    """

    def __init__(
        self,
        selector: str,
        timeout: int,
        action: str = "wait_for_visible",
        attempts: Sequence[str] = (),
    ):
        self.selector = selector
        self.timeout = timeout
        self.action = action
        self.attempts = tuple(attempts)
        message = f"{action} timed out after {timeout}ms for selector '{selector}'"
        if len(self.attempts) > 1:
            message += f" (tried: {', '.join(self.attempts)})"
        super().__init__(message)


SelectorFactory = Callable[[Page], Locator]


@dataclass(frozen=True)
class ElementRef:
    """
    Lazy reference to one element.

    Exactly one source is set:
        selectors: one or more selector strings, primary first
        factory: callable building a Locator from the page
        handle: an already-built Playwright Locator

    Attributes:
        name: Human-readable element name used in logs and reports
    """
    name: str
    selectors: Tuple[str, ...] = ()
    factory: Optional[SelectorFactory] = field(default=None, compare=False)
    handle: Optional[Any] = field(default=None, compare=False)

    def __post_init__(self):
        sources = sum((bool(self.selectors), self.factory is not None, self.handle is not None))
        if sources != 1:
            raise ValueError(
                f"ElementRef '{self.name}' needs exactly one of selectors, factory or handle"
            )

    @classmethod
    def from_selector(
        cls,
        selector: Union[str, Sequence[str]],
        name: Optional[str] = None,
    ) -> "ElementRef":
        """Build a reference from a selector or a fallback chain."""
        if isinstance(selector, str):
            chain: Tuple[str, ...] = (selector,)
        else:
            chain = tuple(selector)
        if not chain or not all(chain):
            raise ValueError(f"Empty selector for element '{name}'")
        return cls(name=name or chain[0], selectors=chain)

    @classmethod
    def from_factory(cls, factory: SelectorFactory, name: str) -> "ElementRef":
        return cls(name=name, factory=factory)

    @classmethod
    def from_handle(cls, handle: Locator, name: Optional[str] = None) -> "ElementRef":
        return cls(name=name or repr(handle), handle=handle)

    @classmethod
    def of(cls, target: "Target") -> "ElementRef":
        """Normalize any accepted target into an ElementRef."""
        if isinstance(target, ElementRef):
            return target
        if isinstance(target, str):
            return cls.from_selector(target)
        return cls.from_handle(target)

    @property
    def kind(self) -> str:
        if self.selectors:
            return "selector"
        if self.factory is not None:
            return "factory"
        return "handle"

    @property
    def selector(self) -> str:
        """Primary selector, or the element name for non-selector sources."""
        return self.selectors[0] if self.selectors else self.name

    @property
    def has_fallbacks(self) -> bool:
        return len(self.selectors) > 1

    def candidates(self, page: Page) -> List[Tuple[str, str, Locator]]:
        """
        Build fresh Locators for this element.

        Returns:
            List of (strategy, selector, locator), primary first
        """
        if self.selectors:
            result = []
            for index, selector in enumerate(self.selectors):
                strategy = "primary" if index == 0 else f"fallback_{index}"
                result.append((strategy, selector, page.locator(selector)))
            return result
        if self.factory is not None:
            return [("primary", self.name, self.factory(page))]
        return [("primary", self.name, self.handle)]


Target = Union[ElementRef, Locator, str]


@dataclass
class LocatorHealth:
    """
    Usage record for one resolved element.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


class SmartLocator:
    """
    Resolves ElementRefs to visible Locators with fallback support.

    Each selector in a chain gets the full timeout; the first one whose
    element becomes visible wins.

    Usage:
        >>> smart = SmartLocator(page)
        >>> ref = ElementRef.from_selector(["#submit", "button[type=submit]"], "submit")
        >>> locator = await smart.locate(ref, timeout=5000)
    """

    def __init__(self, page: Page):
        self.page = page
        self._fallback_used: Dict[str, LocatorHealth] = {}

    async def locate(
        self,
        target: Target,
        timeout: int = 5000,
        action: str = "wait_for_visible",
    ) -> Locator:
        """
        Wait until the element is visible and return its Locator.

        Args:
            target: Element to locate
            timeout: Timeout in milliseconds for each attempt
            action: Operation name reported on failure

        Returns:
            Locator of the first visible match

        Raises:
            ElementTimeoutError: No candidate became visible in time
        """
        ref = ElementRef.of(target)
        tried: List[str] = []

        for strategy, selector, locator in ref.candidates(self.page):
            tried.append(selector)
            try:
                await locator.first.wait_for(state="visible", timeout=timeout)
            except PlaywrightTimeoutError:
                if ref.has_fallbacks:
                    logger.debug(f"Element '{ref.name}' not visible via {strategy}: {selector}")
                continue

            if strategy != "primary":
                health = LocatorHealth(
                    element_name=ref.name,
                    primary_selector=ref.selector,
                    used_fallback=True,
                    fallback_name=strategy,
                    fallback_selector=selector,
                )
                self._fallback_used[ref.name] = health
                logger.warning(f"Element '{ref.name}' used fallback: {strategy} -> {selector}")
            else:
                logger.debug(f"Element '{ref.name}' found: {selector}")
            return locator

        logger.error(f"{action}: '{ref.name}' not visible within {timeout}ms")
        raise ElementTimeoutError(ref.selector, timeout, action=action, attempts=tried)

    async def is_visible(self, target: Target, timeout: int = 2000) -> bool:
        """Return True if the element becomes visible in time; never raises."""
        try:
            await self.locate(target, timeout=timeout, action="is_visible")
            return True
        except (ElementTimeoutError, PlaywrightError):
            return False

    @property
    def fallbacks_used(self) -> Dict[str, LocatorHealth]:
        return dict(self._fallback_used)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists the elements that needed a fallback selector, which are the
        candidates for a selector update in locators.yaml.
        """
        if not self._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "Consider updating the primary selectors:",
            "",
        ]
        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])
        return "\n".join(report_lines)


__all__ = [
    "ElementRef",
    "ElementTimeoutError",
    "LocatorHealth",
    "SmartLocator",
    "Target",
]
