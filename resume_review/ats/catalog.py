"""Static catalog of Applicant Tracking Systems and the target-description lookup.

Scoring rule for a target description:
  +100 if the system name is mentioned,
  +50  if the owning company is mentioned,
  +popularity / 2 as a base.
Entries scoring 25 or less are dropped. If nothing remains, the most popular
entries are returned instead.
"""

from collections.abc import Iterable

from resume_review.ats.models import AtsMatch, AtsSystem

NAME_MENTION_POINTS = 100.0
COMPANY_MENTION_POINTS = 50.0
POPULARITY_WEIGHT = 0.5
SCORE_THRESHOLD = 25.0
DEFAULT_FALLBACK_LIMIT = 5


DEFAULT_ATS_SYSTEMS: tuple[AtsSystem, ...] = (
    AtsSystem(
        id="taleo",
        name="Taleo",
        company="Oracle",
        description="One of the most widely used ATS systems, particularly by large enterprises.",
        popularity=95,
        key_features=(
            "Keyword matching",
            "Skills-based filtering",
            "Education verification",
            "Experience level filtering",
        ),
        special_considerations=(
            "Struggles with complex formatting",
            "Prefers chronological format",
            "May ignore information in headers/footers",
        ),
        website="https://www.oracle.com/human-capital-management/recruiting/",
    ),
    AtsSystem(
        id="workday",
        name="Workday Recruiting",
        company="Workday",
        description="Enterprise-level ATS with strong integration with other HR systems.",
        popularity=90,
        key_features=(
            "Machine learning matching",
            "Skills and competency analysis",
            "Behavioral assessment integration",
            "Mobile application support",
        ),
        special_considerations=(
            "Prefers standard section headings",
            "Better with PDF format",
            "Handles tables well",
        ),
        website="https://www.workday.com/en-us/products/human-capital-management/recruiting.html",
    ),
    AtsSystem(
        id="greenhouse",
        name="Greenhouse",
        company="Greenhouse Software",
        description="Popular among tech companies and startups, known for its user-friendly interface.",
        popularity=85,
        key_features=(
            "Structured hiring process",
            "Customizable scorecards",
            "Diversity and inclusion features",
            "API integrations",
        ),
        special_considerations=(
            "Good at parsing modern resume formats",
            "Handles links well",
            "Supports skill tagging",
        ),
        website="https://www.greenhouse.io/",
    ),
    AtsSystem(
        id="lever",
        name="Lever",
        company="Lever",
        description="Modern ATS focused on collaboration and candidate experience.",
        popularity=80,
        key_features=(
            "Candidate relationship management",
            "Team collaboration tools",
            "Interview scheduling",
            "Diversity and inclusion analytics",
        ),
        special_considerations=(
            "Good with social media links",
            "Supports portfolio links",
            "Handles creative formats better than most",
        ),
        website="https://www.lever.co/",
    ),
    AtsSystem(
        id="jobvite",
        name="Jobvite",
        company="Jobvite",
        description="Comprehensive recruiting platform with social recruiting features.",
        popularity=75,
        key_features=(
            "Social recruiting",
            "Employee referrals",
            "Mobile application",
            "Analytics and reporting",
        ),
        special_considerations=(
            "Prefers clean, simple formatting",
            "Good keyword matching",
            "Handles PDF and Word formats well",
        ),
        website="https://www.jobvite.com/",
    ),
    AtsSystem(
        id="icims",
        name="iCIMS",
        company="iCIMS",
        description="Specialized talent acquisition software used by mid to large companies.",
        popularity=70,
        key_features=(
            "Candidate relationship management",
            "Social recruiting",
            "Mobile recruiting",
            "Advanced analytics",
        ),
        special_considerations=(
            "Prefers standard chronological format",
            "Good with keywords and skills matching",
            "May struggle with creative layouts",
        ),
        website="https://www.icims.com/",
    ),
    AtsSystem(
        id="smartrecruiters",
        name="SmartRecruiters",
        company="SmartRecruiters",
        description="Enterprise talent acquisition suite with a focus on user experience.",
        popularity=65,
        key_features=(
            "Collaborative hiring",
            "Mobile recruiting",
            "AI-powered matching",
            "Marketplace integrations",
        ),
        special_considerations=(
            "Good parsing of various formats",
            "Handles links well",
            "Supports modern resume designs",
        ),
        website="https://www.smartrecruiters.com/",
    ),
    AtsSystem(
        id="brassring",
        name="Kenexa BrassRing",
        company="IBM",
        description="Enterprise-level ATS with robust compliance features.",
        popularity=60,
        key_features=(
            "Compliance management",
            "Global capabilities",
            "Behavioral assessments",
            "Reporting and analytics",
        ),
        special_considerations=(
            "Prefers traditional formats",
            "May struggle with graphics",
            "Better with Word documents than PDFs",
        ),
        website="https://www.ibm.com/talent-management/kenexa/brassring",
    ),
    AtsSystem(
        id="successfactors",
        name="SuccessFactors Recruiting",
        company="SAP",
        description="Part of SAP's HCM suite, used by many large enterprises.",
        popularity=85,
        key_features=(
            "Integration with SAP systems",
            "Candidate relationship management",
            "Career site builder",
            "Analytics and reporting",
        ),
        special_considerations=(
            "Prefers standard formatting",
            "Good keyword matching",
            "Handles tables and bullets well",
        ),
        website="https://www.sap.com/products/human-resources-hcm/recruiting-onboarding.html",
    ),
    AtsSystem(
        id="applytrak",
        name="ApplyTrak",
        company="ApplyTrak",
        description="Specialized ATS for small to medium businesses.",
        popularity=40,
        key_features=(
            "Simple interface",
            "Customizable application forms",
            "Email notifications",
            "Basic reporting",
        ),
        special_considerations=(
            "Limited parsing capabilities",
            "Prefers simple formats",
            "May struggle with complex layouts",
        ),
    ),
    AtsSystem(
        id="recruitee",
        name="Recruitee",
        company="Recruitee",
        description="Collaborative hiring platform popular with growing companies.",
        popularity=55,
        key_features=(
            "Collaborative hiring",
            "Careers page builder",
            "Chrome extension",
            "Analytics",
        ),
        special_considerations=(
            "Good with modern formats",
            "Handles links well",
            "Supports social media profiles",
        ),
        website="https://recruitee.com/",
    ),
    AtsSystem(
        id="zohorecruit",
        name="Zoho Recruit",
        company="Zoho",
        description="Part of the Zoho suite, popular with small to medium businesses.",
        popularity=50,
        key_features=(
            "Integration with Zoho suite",
            "Customizable workflows",
            "Social recruiting",
            "Analytics",
        ),
        special_considerations=(
            "Prefers standard formats",
            "Good with keywords",
            "May struggle with creative layouts",
        ),
        website="https://www.zoho.com/recruit/",
    ),
)


class AtsCatalog:
    """Read-only lookup over a fixed set of ATS entries."""

    def __init__(
        self,
        systems: Iterable[AtsSystem] = DEFAULT_ATS_SYSTEMS,
        fallback_limit: int = DEFAULT_FALLBACK_LIMIT,
    ) -> None:
        self._systems = tuple(systems)
        self._fallback_limit = fallback_limit

    @property
    def systems(self) -> tuple[AtsSystem, ...]:
        return self._systems

    def get(self, system_id: str) -> AtsSystem | None:
        for system in self._systems:
            if system.id == system_id:
                return system
        return None

    def by_popularity(self, limit: int | None = None) -> list[AtsSystem]:
        """Return entries sorted by popularity, most popular first."""
        ranked = sorted(self._systems, key=lambda s: s.popularity, reverse=True)
        return ranked[:limit] if limit else ranked

    def score(self, system: AtsSystem, target_description: str) -> float:
        text = target_description.lower()
        points = system.popularity * POPULARITY_WEIGHT
        if system.company.lower() in text:
            points += COMPANY_MENTION_POINTS
        if system.name.lower() in text:
            points += NAME_MENTION_POINTS
        return points

    def match(self, target_description: str) -> list[AtsMatch]:
        """Score every entry against the description, dropping those at or below threshold."""
        matches = [
            AtsMatch(system=system, score=self.score(system, target_description))
            for system in self._systems
        ]
        kept = [m for m in matches if m.score > SCORE_THRESHOLD]
        return sorted(kept, key=lambda m: m.score, reverse=True)

    def for_target_description(
        self, target_description: str, limit: int | None = None
    ) -> list[AtsSystem]:
        """Return the systems most likely used for a target description.

        `limit` caps the returned list; it does not affect the fallback size.
        """
        matches = self.match(target_description)
        if not matches:
            systems = self.by_popularity(self._fallback_limit)
        else:
            systems = [m.system for m in matches]
        return systems[:limit] if limit else systems
