"""
Matching Engine

Orchestrates a recalculation for one student profile:
1. Candidate Fetch - ask each country's directory for universities
2. Scoring - base score plus profile, difficulty and budget adjustments
3. Boost - preferred countries get a flat bonus
4. Classification - Dream / Target / Safe
5. Grouping - one CountryMatchGroup per target country
"""

import logging
from typing import Dict, Iterable, List, Optional

import httpx

from .contracts import StudentProfile, UniversityCandidate, RankedUniversity, CountryMatchGroup
from .constants import TARGET_COUNTRIES, AI_MODE
from .directories import UniversityDirectory, HipolabsDirectory, CollegeScorecardDirectory
from .scorers import calculate_match, apply_preference_boost, estimate_tuition, normalize_countries
from .classifier import classify_fit, get_category_counts

logger = logging.getLogger("matching.engine")


class MatchingEngine:
    """
    Scores universities from external directories against a student profile.

    Directories are injected so the engine never owns network clients.
    """

    def __init__(
        self,
        default_directory: UniversityDirectory,
        country_directories: Optional[Dict[str, UniversityDirectory]] = None,
        target_countries: Optional[List[str]] = None,
    ):
        """
        Args:
            default_directory: Used for any country without its own directory.
            country_directories: Country name -> directory override.
            target_countries: Countries queried on every recalculation.
        """
        self.default_directory = default_directory
        self.country_directories = country_directories or {}
        self.target_countries = list(target_countries or TARGET_COUNTRIES)

    def directory_for(self, country: str) -> UniversityDirectory:
        return self.country_directories.get(country, self.default_directory)

    async def recalculate(self, profile: StudentProfile) -> List[CountryMatchGroup]:
        """
        Build match groups for every target country.

        Countries are fetched one after another. A directory error aborts
        the whole recalculation so callers never persist a partial result.
        """
        preferred = normalize_countries(profile.preferred_countries)
        groups: List[CountryMatchGroup] = []

        for country in self.target_countries:
            candidates = await self.directory_for(country).fetch(country)
            ranked = [self.rank_candidate(profile, candidate, country, preferred) for candidate in candidates]
            groups.append(CountryMatchGroup(country=country, universities=ranked))

            logger.info(
                "Scored %d universities for %s: %s",
                len(ranked), country, get_category_counts([u.match_score for u in ranked]),
            )

        for group in groups:
            group.universities = [u for u in group.universities if u.name and u.name.strip()]

        return groups

    def rank_candidate(
        self,
        profile: StudentProfile,
        candidate: UniversityCandidate,
        country: str,
        preferred: set,
    ) -> RankedUniversity:
        """Score and classify a single university."""
        score = calculate_match(profile, candidate.difficulty, country)
        score = apply_preference_boost(score, country, preferred)

        return RankedUniversity(
            name=candidate.name,
            website=candidate.website,
            difficulty=candidate.difficulty,
            country=country,
            portal_url=candidate.website or "",
            match_score=score,
            fit=classify_fit(score),
            tuition=estimate_tuition(country),
            ranking=None,
        )


def filter_by_mode(
    groups: List[CountryMatchGroup],
    preferred_countries: Optional[Iterable[str]],
    mode: str,
) -> List[CountryMatchGroup]:
    """
    In "ai" mode keep only the student's preferred countries; any other mode
    returns every group.
    """
    if mode != AI_MODE:
        return list(groups)

    preferred = normalize_countries(preferred_countries)
    return [g for g in groups if g.country in preferred]


def build_engine(client: httpx.AsyncClient) -> MatchingEngine:
    """Engine wired to the production directories."""
    return MatchingEngine(
        default_directory=HipolabsDirectory(client),
        country_directories={"United States": CollegeScorecardDirectory(client)},
    )
