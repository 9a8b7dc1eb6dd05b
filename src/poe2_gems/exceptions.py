"""
Custom exceptions for PoE2 gem lookups.

Wiki failures are raised inside the fetch layer and downgraded to empty
results at its public boundary; only the tool layer turns them into text.
"""


class GemDataError(Exception):
    pass


class WikiError(GemDataError):
    pass


class NoTagsError(GemDataError):
    def __init__(self, tag_field: str | None = None):
        self.tag_field = tag_field
        super().__init__("Gem has no tags to compare")
