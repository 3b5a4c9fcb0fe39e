"""The fixed default catalog of categories and their seed items.

Category names are consumed by every reconciliation.  Seed items are
consumed only once, when a brand-new store is initialized.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SeedItem:
    title: str
    text: str


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    items: tuple[SeedItem, ...] = ()


@dataclass(frozen=True)
class DefaultCatalog:
    """Ordered, immutable list of default categories."""

    entries: tuple[CatalogEntry, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.entries)

    def canonical(self, name: str) -> str | None:
        """Return the catalog spelling of *name*, or None if it is not a default.

        Comparison is case-insensitive and ignores surrounding whitespace.
        """
        wanted = name.strip().casefold()
        for entry in self.entries:
            if entry.name.casefold() == wanted:
                return entry.name
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.canonical(name) is not None

    def __len__(self) -> int:
        return len(self.entries)


DEFAULT_CATALOG = DefaultCatalog(
    entries=(
        CatalogEntry(
            "Asking",
            (
                SeedItem(
                    "Clarify Requirements",
                    "Please clarify the specific requirements and constraints for this "
                    "task. What are the expected inputs, outputs, and edge cases I should "
                    "consider?",
                ),
                SeedItem(
                    "Ask for Examples",
                    "Can you provide 2-3 concrete examples of what you're looking for? "
                    "This will help me understand the pattern and deliver exactly what "
                    "you need.",
                ),
                SeedItem(
                    "Scope Confirmation",
                    "Before I proceed, let me confirm the scope: [summarize "
                    "understanding]. Is this correct, or should I adjust my approach?",
                ),
            ),
        ),
        CatalogEntry(
            "Planning",
            (
                SeedItem(
                    "Break Down Task",
                    "Break this down into smaller, manageable steps with clear "
                    "priorities. What should be tackled first and what can wait?",
                ),
                SeedItem(
                    "Architecture Planning",
                    "Help me design a clean, scalable architecture for this feature. "
                    "What are the key components and how should they interact?",
                ),
                SeedItem(
                    "Risk Assessment",
                    "What potential issues or blockers should I be aware of with this "
                    "approach? How can we mitigate these risks early?",
                ),
            ),
        ),
        CatalogEntry(
            "Coding",
            (
                SeedItem(
                    "Clean Code Request",
                    "Write clear, simple code that focuses on the core functionality. "
                    "Avoid over-engineering and keep it maintainable. Remove any unused "
                    "functions.",
                ),
                SeedItem(
                    "Minimal Conditionals",
                    "Implement this with minimal use of elif/else statements. Use early "
                    "returns and guard clauses instead of nested conditionals where "
                    "possible.",
                ),
                SeedItem(
                    "Single Responsibility",
                    "Create focused functions that do one thing well. Each function "
                    "should have a clear, single purpose and be easy to test.",
                ),
            ),
        ),
        CatalogEntry(
            "Debugging",
            (
                SeedItem(
                    "Systematic Debug",
                    "Help me debug this step by step: 1) Identify the expected vs actual "
                    "behavior, 2) Isolate the problem area, 3) Check common causes.",
                ),
                SeedItem(
                    "Error Analysis",
                    "Analyze this error message and suggest the most likely causes and "
                    "solutions, starting with the simplest fixes first.",
                ),
                SeedItem(
                    "Reproduction Steps",
                    "Provide minimal steps to reliably reproduce this issue, including "
                    "the exact environment and input conditions.",
                ),
            ),
        ),
        CatalogEntry(
            "Reviewing",
            (
                SeedItem(
                    "Code Review",
                    "Review this code for: 1) Logic correctness, 2) Performance issues, "
                    "3) Security concerns, 4) Maintainability improvements.",
                ),
                SeedItem(
                    "Best Practices Check",
                    "Does this code follow best practices? Check for proper error "
                    "handling, naming conventions, and adherence to SOLID principles.",
                ),
                SeedItem(
                    "Test Coverage",
                    "What test cases should I write for this code? Include happy path, "
                    "edge cases, and error conditions.",
                ),
            ),
        ),
        CatalogEntry(
            "Refactoring",
            (
                SeedItem(
                    "Simplify Code",
                    "Help me refactor this code to be simpler and more readable while "
                    "maintaining the same functionality. Remove any unnecessary "
                    "complexity.",
                ),
                SeedItem(
                    "Extract Functions",
                    "Identify opportunities to extract reusable functions from this "
                    "code. Focus on reducing duplication and improving modularity.",
                ),
                SeedItem(
                    "Improve Performance",
                    "Suggest performance improvements for this code. Focus on "
                    "algorithmic efficiency and removing bottlenecks.",
                ),
            ),
        ),
        CatalogEntry(
            "Docs/Comments",
            (
                SeedItem(
                    "Function Documentation",
                    "Write clear, concise documentation for this function including "
                    "purpose, parameters, return value, and usage examples.",
                ),
                SeedItem(
                    "README Section",
                    "Create a clear README section explaining how to set up, use, and "
                    "contribute to this project. Include examples and common issues.",
                ),
                SeedItem(
                    "Inline Comments",
                    'Add helpful inline comments explaining the "why" behind complex '
                    'logic, not just the "what". Focus on business logic and non-obvious '
                    "decisions.",
                ),
            ),
        ),
    )
)
