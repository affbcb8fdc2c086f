"""
Booking Extraction Example

Pulls pickup, dropoff, time and special requests out of free-text ride
requests with a local Ollama model.
"""

import asyncio

from casual_llm import ModelConfig, Provider, create_provider

from chauffeur_memory.synthesis import BookingDetailsExtracter


async def main():
    llm_provider = create_provider(
        ModelConfig(
            name="qwen2.5:7b-instruct",
            provider=Provider.OLLAMA,
            base_url="http://localhost:11434",
        )
    )
    extracter = BookingDetailsExtracter(llm_provider)

    requests = [
        "Can you get me from Newark to 30 Rock on Friday at 6pm? I'll have two large suitcases.",
        "Thanks, the ride was great!",
    ]

    for text in requests:
        print(f"Message: {text}")
        details = await extracter.extract(text)
        if details is None:
            print("  No booking intent\n")
            continue
        print(f"  Pickup: {details.pickup}")
        print(f"  Dropoff: {details.dropoff}")
        print(f"  When: {details.pickup_time}")
        print(f"  Special requests: {details.special_requests}\n")


if __name__ == "__main__":
    asyncio.run(main())
