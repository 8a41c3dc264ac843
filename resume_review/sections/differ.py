from collections.abc import Mapping

from resume_review.versioning.models import Change, ChangeKind


def diff(from_sections: Mapping[str, str], to_sections: Mapping[str, str]) -> list[Change]:
    """Compute section-level changes between two section mappings.

    Emission order: additions (in `to` order), deletions (in `from` order),
    modifications (in `to` order). A section is the unit of change: any text
    difference inside it is reported as one whole-section modification.
    """
    additions = [
        Change(
            kind=ChangeKind.ADDITION,
            section_name=name,
            after=text,
            description=f"Added new section: {name}",
        )
        for name, text in to_sections.items()
        if name not in from_sections
    ]
    deletions = [
        Change(
            kind=ChangeKind.DELETION,
            section_name=name,
            before=text,
            description=f"Removed section: {name}",
        )
        for name, text in from_sections.items()
        if name not in to_sections
    ]
    modifications = [
        Change(
            kind=ChangeKind.MODIFICATION,
            section_name=name,
            before=from_sections[name],
            after=text,
            description=f"Modified section: {name}",
        )
        for name, text in to_sections.items()
        if name in from_sections and from_sections[name] != text
    ]
    return additions + deletions + modifications
