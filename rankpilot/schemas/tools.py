"""
RankPilot — Tool input/output schemas.

Inputs are strict (unknown fields rejected). Outputs describe exactly what
the AI must return; anything else is treated as a failed invocation.
"""

from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


def _check_http_url(value: str) -> str:
    value = value.strip()
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http(s) URL")
    return value


class ToolInput(BaseModel):
    model_config = {"populate_by_name": True, "extra": "forbid", "str_strip_whitespace": True}


class ToolOutput(BaseModel):
    model_config = {"populate_by_name": True}


# ── Keyword suggestion ──────────────────────────────────

class KeywordSuggestionInput(ToolInput):
    topic: str = Field(..., min_length=2, max_length=200)
    include_long_tail_keywords: bool = Field(False, alias="includeLongTailKeywords")


class KeywordSuggestionOutput(ToolOutput):
    keywords: list[str] = Field(..., min_length=1)


# ── Content brief ───────────────────────────────────────

class OutlineSection(ToolOutput):
    level: int = Field(..., ge=1, le=4)
    title: str
    description: str = ""


class RecommendedMeta(ToolOutput):
    title: str
    description: str


class ContentBriefInput(ToolInput):
    keyword: str = Field(..., min_length=3, max_length=200)


class ContentBriefOutput(ToolOutput):
    title: str
    brief_summary: str = Field(..., alias="briefSummary")
    primary_keyword: str = Field(..., alias="primaryKeyword")
    search_intent: str = Field(..., alias="searchIntent")
    word_count: int = Field(..., alias="wordCount", ge=0)
    semantic_keywords: list[str] = Field(default_factory=list, alias="semanticKeywords")
    recommended_meta: RecommendedMeta = Field(..., alias="recommendedMeta")
    outline: list[OutlineSection] = Field(..., min_length=1)


# ── SERP simulation ─────────────────────────────────────

class SerpViewInput(ToolInput):
    keyword: str = Field(..., min_length=1, max_length=200)


class OrganicResult(ToolOutput):
    position: int = Field(..., ge=1, le=10)
    title: str
    url: str
    snippet: str


class PeopleAlsoAsk(ToolOutput):
    question: str


class SerpViewOutput(ToolOutput):
    organic_results: list[OrganicResult] = Field(
        ..., alias="organicResults", min_length=10, max_length=10
    )
    people_also_ask: list[PeopleAlsoAsk] = Field(
        ..., alias="peopleAlsoAsk", min_length=4, max_length=4
    )


# ── SEO audit ───────────────────────────────────────────

class AuditUrlInput(ToolInput):
    url: str = Field(..., max_length=2048)

    @field_validator("url")
    @classmethod
    def _http_url(cls, v: str) -> str:
        return _check_http_url(v)


class AuditItem(ToolOutput):
    id: str
    name: str
    score: float = Field(..., ge=0, le=100)
    details: str
    status: Literal["good", "warning", "error"]


class AuditUrlOutput(ToolOutput):
    overall_score: float = Field(..., alias="overallScore", ge=0, le=100)
    items: list[AuditItem] = Field(..., min_length=1)
    summary: str


# ── Link analysis ───────────────────────────────────────

class LinkAnalysisInput(ToolInput):
    url: str = Field(..., max_length=2048)

    @field_validator("url")
    @classmethod
    def _http_url(cls, v: str) -> str:
        return _check_http_url(v)


class Backlink(ToolOutput):
    referring_domain: str = Field(..., alias="referringDomain")
    backlink_url: str = Field(..., alias="backlinkUrl")
    anchor_text: str = Field(..., alias="anchorText")
    domain_authority: float = Field(..., alias="domainAuthority", ge=0, le=100)


class BacklinkSummary(ToolOutput):
    total_backlinks: int = Field(..., alias="totalBacklinks", ge=0)
    referring_domains: int = Field(..., alias="referringDomains", ge=0)


class LinkAnalysisOutput(ToolOutput):
    backlinks: list[Backlink]
    summary: BacklinkSummary


# ── Content optimization ────────────────────────────────

class ContentOptimizationInput(ToolInput):
    content: str = Field(..., min_length=20, max_length=50000)
    target_keywords: str = Field(..., alias="targetKeywords", min_length=1, max_length=500)

    @property
    def keyword_list(self) -> list[str]:
        return [k.strip() for k in self.target_keywords.split(",") if k.strip()]


class ContentOptimizationOutput(ToolOutput):
    readability_suggestions: str = Field(..., alias="readabilitySuggestions")
    keyword_density_suggestions: str = Field(..., alias="keywordDensitySuggestions")
    semantic_relevance_suggestions: str = Field(..., alias="semanticRelevanceSuggestions")
    overall_score: float = Field(..., alias="overallScore", ge=0, le=100)


# ── Competitor analysis ─────────────────────────────────

class CompetitorAnalysisInput(ToolInput):
    your_url: str = Field(..., alias="yourUrl", max_length=2048)
    competitor_urls: list[str] = Field(..., alias="competitorUrls", min_length=1, max_length=5)
    keywords: list[str] = Field(..., min_length=1, max_length=20)

    @field_validator("your_url")
    @classmethod
    def _your_url(cls, v: str) -> str:
        return _check_http_url(v)

    @field_validator("competitor_urls")
    @classmethod
    def _competitor_urls(cls, v: list[str]) -> list[str]:
        return [_check_http_url(u) for u in v]

    @field_validator("keywords")
    @classmethod
    def _keywords(cls, v: list[str]) -> list[str]:
        cleaned = [k.strip() for k in v if k.strip()]
        if not cleaned:
            raise ValueError("at least one non-blank keyword is required")
        return cleaned


class RankInfo(ToolOutput):
    rank: int | Literal["N/A"]
    reason: str | None = None


class KeywordRanking(ToolOutput):
    keyword: str
    your_rank: RankInfo = Field(..., alias="yourRank")
    competitor_ranks: dict[str, RankInfo] = Field(default_factory=dict, alias="competitorRanks")


class CompetitorAnalysisOutput(ToolOutput):
    rankings: list[KeywordRanking]
    content_gaps: list[str] = Field(..., alias="contentGaps")
