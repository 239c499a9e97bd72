from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationRequest(BaseModel):
    """Base for generation payloads.

    Every field is optional on the wire. Values that are not strings are
    treated as absent so the endpoint answers with its empty result rather
    than a validation error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None

    def as_fields(self) -> dict[str, str | None]:
        return self.model_dump()


class ArticleRequest(GenerationRequest):
    article_text: str | None = Field(default=None, alias="articleText")


class HeadlineRequest(GenerationRequest):
    headline: str | None = None


class HeadlineArticleRequest(GenerationRequest):
    headline: str | None = None
    article_text: str | None = Field(default=None, alias="articleText")


class AdjustHeadlineRequest(HeadlineArticleRequest):
    tweak: str | None = None


class LeadRequest(ArticleRequest):
    style: str | None = None


class PromptRequest(GenerationRequest):
    prompt: str | None = None


class ImageRequest(PromptRequest):
    description: str | None = None
    provider: str | None = None


class TickerRequest(GenerationRequest):
    ticker: str | None = None


class HeadlineWorkshopRequest(ArticleRequest):
    action: str | None = None
    quote: str | None = None
    selected_headline: str | None = Field(default=None, alias="selectedHeadline")
    enhancement_type: str | None = Field(default=None, alias="enhancementType")
    specific_quote: str | None = Field(default=None, alias="specificQuote")
    custom_enhancement: str | None = Field(default=None, alias="customEnhancement")


class KeywordSearchRequest(GenerationRequest):
    keywords: str | None = None


class ErrorField(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str | None = None


class HeadlinesResponse(ErrorField):
    headlines: list[str] = []


class ReviewResponse(ErrorField):
    review: str = ""
    suggestions: list[str] = []


class SimilarHeadlinesResponse(ErrorField):
    similar: list[str] = []


class PunchyVariantsResponse(ErrorField):
    variants: list[str] = []


class SEOHeadlineResponse(ErrorField):
    seo_headline: str = Field(default="", alias="seoHeadline")


class LeveledHeadlinesResponse(ErrorField):
    level1: list[str] = []
    level2: list[str] = []
    level3: list[str] = []


class LeadResponse(ErrorField):
    lead: str = ""


class ArticleWithH2sResponse(ErrorField):
    article_with_h2s: str = Field(default="", alias="articleWithH2s")


class QuotesResponse(ErrorField):
    quotes: list[str] = []


class ImageIdea(BaseModel):
    title: str
    description: str
    prompt: str


class ImageIdeasResponse(ErrorField):
    ideas: list[ImageIdea] = []


class OptimizedPromptResponse(ErrorField):
    optimized_prompt: str = Field(default="", alias="optimizedPrompt")


class GeneratedImageResponse(ErrorField):
    image_url: str = Field(default="", alias="imageUrl")
    alt_text: str = Field(default="", alias="altText")
    revised_prompt: str = Field(default="", alias="revisedPrompt")


class AltTextResponse(ErrorField):
    alt_text: str = Field(default="", alias="altText")


class AnalystRatingsResponse(ErrorField):
    paragraph: str = ""
    ratings: list[str] = []


class HeadlineWorkshopResponse(ErrorField):
    headlines: list[str] = []
    key_names: list[str] = Field(default=[], alias="keyNames")
    enhanced_headline: str | None = Field(default=None, alias="enhancedHeadline")
    original_headline: str | None = Field(default=None, alias="originalHeadline")
    enhancement_type: str | None = Field(default=None, alias="enhancementType")


class NewsArticle(BaseModel):
    id: str
    title: str
    url: str
    created: str
    teaser: str = ""
    author: str = ""
    stocks: list[Any] = []
    tags: list[Any] = []


class KeywordSearchResponse(ErrorField):
    articles: list[NewsArticle] = []
    total_found: int = Field(default=0, alias="totalFound")
    search_term: str | None = Field(default=None, alias="searchTerm")
    message: str | None = None
