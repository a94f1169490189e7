"""
Product recommendation for a prospective customer.

The model picks 2-3 products from the catalog below.  Names are requested
verbatim but not enforced: a recommendation whose name drifts from the
catalog is still returned as the model wrote it.
"""

from __future__ import annotations

from app.core.errors import AssistError
from app.core.logging import logger
from app.domain import schema as s
from app.domain.artifacts import ProductRecommendation
from app.domain.transcript import Transcript, format_transcript
from app.infra.providers.contracts import RecommendationsContract
from app.infra.providers.gemini import GeminiClient
from app.tasks.common import COMPANY_NAME, has_enough_context

PRODUCT_CATALOG: dict[str, str] = {
    "AutoGuard Plus": (
        "Comprehensive auto insurance covering accidents, theft, and damage, with "
        "optional roadside assistance and rental car coverage."
    ),
    "HomeSafe Secure": (
        "Homeowners insurance that protects the structure of the home, personal "
        "belongings, and provides liability coverage against accidents on the property."
    ),
    "RentersProtect": (
        "Affordable coverage for a renter's personal property (like electronics, "
        "furniture) against theft or damage, and includes liability protection."
    ),
    "LifeLine Term": (
        "Simple, affordable term life insurance that provides a financial safety net "
        "for the customer's loved ones in the event of their passing."
    ),
    "BusinessShield": (
        "Customizable insurance for small to medium-sized businesses, covering "
        "property, liability, and business interruption."
    ),
}

RECOMMENDATION_SCHEMA = s.ResponseSchema(
    name="product_recommendations",
    root=s.obj({
        "recommendations": s.array(
            s.obj({
                "product_name": s.string(
                    "The name of the recommended product. Must be one of the "
                    "official product names."
                ),
                "reasoning": s.string(
                    "A concise, 1-2 sentence explanation of why this product is a "
                    "good fit for the customer based on the transcript."
                ),
            }),
            "List of 2-3 recommended insurance products.",
        ),
    }),
)


def _catalog_block() -> str:
    return "\n".join(f"- **{name}**: {desc}" for name, desc in PRODUCT_CATALOG.items())


def build_recommendation_prompt(transcript: Transcript) -> str:
    return f"""\
You are a product recommendation expert for a fictional insurance company called \
'{COMPANY_NAME}'. Your goal is to help a call center agent by analyzing a conversation \
with a potential new customer and recommending the most suitable insurance products.

Based on the provided transcript, identify the customer's needs, life situation, assets, \
and potential risks. Then, recommend 2-3 products from the list below that would be the \
best fit. For each recommendation, provide a concise, 1-2 sentence explanation for why \
it's a good choice for this specific customer.

**{COMPANY_NAME} Products:**
{_catalog_block()}

Analyze the following transcript:
{format_transcript(transcript)}
"""


async def recommend_products(
    client: GeminiClient,
    transcript: Transcript,
    *,
    call_id: str = "",
) -> list[ProductRecommendation]:
    if not has_enough_context(transcript):
        return []

    try:
        decoded = await client.generate_structured(
            build_recommendation_prompt(transcript),
            RecommendationsContract,
            RECOMMENDATION_SCHEMA,
        )
        data = decoded.unwrap()
    except AssistError as e:
        logger.warning("Call %s: product recommendation failed (%s)", call_id, e)
        return []

    recs = [item.to_domain() for item in data.recommendations]
    off_catalog = [r.product_name for r in recs if r.product_name not in PRODUCT_CATALOG]
    if off_catalog:
        logger.info("Call %s: recommendations outside catalog: %s", call_id, off_catalog)
    return recs
