"""
Example: Generating text and chatting through AIHelper

Creates a client from the environment, runs a single prompt, a template
prompt, a dynamic template and a short multi-turn chat.

Usage:
    python examples/basic_usage.py [openai|anthropic]

Requirements:
    - OPENAI_API_KEY or ANTHROPIC_API_KEY in environment
    - Optional AIHELPER_* variables (e.g. AIHELPER_MODEL=gpt-4o-mini)
"""

import asyncio
import sys

from aihelper.config import Provider, configure_logging
from aihelper.llm import LLMClientFactory, LLMError, InvalidArgumentError
from aihelper.prompts import DynamicPromptStore, PromptTemplates


async def main(provider_name: str):
    """Run a few requests against one provider"""
    configure_logging()

    try:
        client = LLMClientFactory.create_client_from_env(Provider(provider_name))
    except InvalidArgumentError as e:
        print(f"❌ {e}")
        return

    async with client:
        print(f"Using {client.provider_name} model {client.model_id}")

        try:
            answer = await client.generate("Name three primary colors.")
            print(f"✅ generate: {answer}")

            summary = await client.generate_with_template(
                PromptTemplates.SUMMARIZE,
                "Python is a high-level language emphasizing readability.",
            )
            print(f"✅ template: {summary}")

            prompts = DynamicPromptStore({"haiku": "Write a haiku about the topic below."})
            haiku = await client.generate_with_dynamic_template(prompts, "haiku", "autumn rain")
            print(f"✅ dynamic template: {haiku}")

            for message in ("Hi, my name is Sam.", "What is my name?"):
                reply = await client.chat(
                    "demo-session",
                    message,
                    initial_system_prompt="You are a concise assistant.",
                    timeout=30,
                )
                print(f"💬 {message} -> {reply}")

        except LLMError as e:
            print(f"❌ Request failed: {e}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "openai"))
