"""Keyword-based categorization of document titles."""

import enum
from dataclasses import dataclass


class DocumentCategory(str, enum.Enum):
    DASHBOARD = "dashboard"
    WIKI = "wiki"
    ARCHITECTURE = "architecture"
    PROJECT = "project"
    MEETING = "meeting"
    PROPOSAL = "proposal"
    TEMPLATE = "template"
    GUIDE = "guide"
    OTHER = "other"


@dataclass(frozen=True)
class CategoryConfig:
    label: str
    icon: str
    keywords: tuple[str, ...]


# Checked in this order; the first category with a matching keyword wins.
CATEGORY_CONFIG: dict[DocumentCategory, CategoryConfig] = {
    DocumentCategory.DASHBOARD: CategoryConfig(
        "Dashboard", "📊", ("dashboard", "client dashboard", "status", "overview")
    ),
    DocumentCategory.WIKI: CategoryConfig(
        "Wiki", "📚", ("wiki", "knowledge", "company wiki", "documentation")
    ),
    DocumentCategory.ARCHITECTURE: CategoryConfig(
        "Architecture", "🏗️", ("architecture", "system", "backend", "diagram")
    ),
    DocumentCategory.PROJECT: CategoryConfig(
        "Project", "📋", ("project", "plan", "roadmap", "timeline")
    ),
    DocumentCategory.MEETING: CategoryConfig(
        "Meeting", "💬", ("meeting", "notes", "agenda", "discussion")
    ),
    DocumentCategory.PROPOSAL: CategoryConfig(
        "Proposal", "💡", ("proposal", "suggestion", "idea", "request")
    ),
    DocumentCategory.TEMPLATE: CategoryConfig(
        "Template", "🎨", ("template", "showcase", "sample")
    ),
    DocumentCategory.GUIDE: CategoryConfig(
        "Guide", "📖", ("guide", "how to", "tutorial", "instructions")
    ),
    DocumentCategory.OTHER: CategoryConfig("Document", "📄", ()),
}


def detect_document_category(title: str) -> DocumentCategory:
    """Category of a document, judged by case-insensitive keyword match on its title."""
    lowered = title.lower()
    for category, config in CATEGORY_CONFIG.items():
        if any(keyword in lowered for keyword in config.keywords):
            return category
    return DocumentCategory.OTHER


def get_category_config(category: DocumentCategory) -> CategoryConfig:
    return CATEGORY_CONFIG[category]


def get_all_categories() -> list[DocumentCategory]:
    """Every assignable category, excluding the ``other`` fallback."""
    return [category for category in CATEGORY_CONFIG if category is not DocumentCategory.OTHER]
