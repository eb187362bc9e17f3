import asyncio
import logging
import sys

from campaign_lab.config import GEMINI_API_KEY, LOG_LEVEL, OPENAI_API_KEY
from campaign_lab.engine import CreativeBatchError
from campaign_lab.handlers.session import ROOT_ID, create_session
from campaign_lab.models import CreativeFormat, NodeKind


async def main(product: str | None, formats: list[CreativeFormat]):
    if not OPENAI_API_KEY or not GEMINI_API_KEY:
        print("Error: OPENAI_API_KEY and GEMINI_API_KEY must be set in .env")
        sys.exit(1)

    session = create_session()
    if product:
        session.update_project(product_name=product)

    personas = await session.dispatch("expand_personas", ROOT_ID)
    print(f"\n=== PERSONAS ({len(personas)}) ===", flush=True)
    for node in personas:
        print(f"- {node.title}: {node.description}", flush=True)
    if not personas:
        return

    angles = await session.dispatch("expand_angles", personas[0].id)
    print(f"\n=== ANGLES for {personas[0].title} ({len(angles)}) ===", flush=True)
    for node in angles:
        print(f"- {node.title} [{node.description}]", flush=True)
    if not angles:
        return

    try:
        creatives = await session.generate_creatives(angles[0].id, formats)
    except CreativeBatchError as e:
        print(f"\nStopped at {e.failed_format.value}: {e}", flush=True)
        creatives = [session.store.require(node_id) for node_id in e.created_ids]

    print(f"\n=== CREATIVES ({len(creatives)}) ===", flush=True)
    for node in creatives:
        creative = node.creative
        has_image = "image" if creative.image_url else "no image"
        print(f"[{creative.format.value}] {creative.ad_copy.headline} ({has_image})", flush=True)

    spent_in = sum(n.input_tokens for n in session.store.nodes)
    spent_out = sum(n.output_tokens for n in session.store.nodes)
    total = len(session.store.find(lambda n: n.kind != NodeKind.ROOT))
    print(f"\nTotal: {total} nodes, tokens input={spent_in} output={spent_out}")


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    product = sys.argv[1] if len(sys.argv) > 1 else None
    formats = [CreativeFormat(v) for v in sys.argv[2:]] or [CreativeFormat.BIG_FONT, CreativeFormat.MEME]
    asyncio.run(main(product, formats))
