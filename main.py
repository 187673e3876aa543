import argparse
import asyncio
import sys
from typing import Optional

import aiohttp

from serenity.config.settings import ConfigManager, AppConfig, DEFAULT_CONFIG_PATH
from serenity.utils.logging import StructuredLogger
from serenity.mood.mapper import MoodMapper
from serenity.recommendation.engine import RecommendationEngine
from serenity.recommendation.errors import RecommendationError
from serenity.recommendation.schemas import (
    AggregatedResult,
    CallerIdentity,
    RecommendationRequest,
    UserProfile
)


class SerenityApp:
    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_manager = ConfigManager()
        self.config: Optional[AppConfig] = None
        self.logger: Optional[StructuredLogger] = None
        self.config_path = config_path

    def initialize(self) -> None:
        try:
            self.config = self.config_manager.load(self.config_path)
            self.logger = StructuredLogger(
                "serenity.main",
                level=self.config.logging.level,
                fmt=self.config.logging.format
            )
            self.logger.log_config(self.config.to_dict())
        except Exception as e:
            print(f"Failed to initialize Serenity: {e}")
            sys.exit(1)

    async def _recommend(self, request: RecommendationRequest,
                         identity: Optional[CallerIdentity]) -> AggregatedResult:
        async with aiohttp.ClientSession() as session:
            engine = RecommendationEngine.from_config(self.config, session, self.logger)
            return await engine.recommend(request, identity)

    def generate_recommendations(self, mood: str, location: Optional[str],
                                 user_id: Optional[str]) -> None:
        request = RecommendationRequest(mood=mood, profile=UserProfile(location=location))
        identity = CallerIdentity(uid=user_id) if user_id else None
        result = asyncio.run(self._recommend(request, identity))
        self._display_recommendations(result)

    def show_moods(self) -> None:
        table = MoodMapper().describe()
        print(f"{'mood':<12} {'genre':<14} video query")
        for mood, mapping in table["moods"].items():
            print(f"{mood:<12} {mapping['genre']:<14} {mapping['video_query']}")
        defaults = table["defaults"]
        print(f"{'(other)':<12} {defaults['genre']:<14} {defaults['video_query']}")

    def _display_recommendations(self, result: AggregatedResult) -> None:
        print("\n" + "=" * 60)
        print("SERENITY RECOMMENDATIONS")
        print("=" * 60)
        for i, item in enumerate(result, 1):
            print(f"{i:2d}. [{item.item_type.value}] {item.title}")
            if item.subtitle:
                print(f"     {item.subtitle}")
            print(f"     {item.description}")
            print(f"     Score: {item.relevance_score:.1f}")
            if item.action_url:
                print(f"     {item.action_url}")
            print()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serenity - mood-based recommendation aggregator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    recommend_parser = subparsers.add_parser("recommend", help="Aggregate recommendations for a mood")
    recommend_parser.add_argument(
        "--mood",
        required=True,
        help="Mood signal (e.g. anxious, sad, happy)"
    )
    recommend_parser.add_argument(
        "--location",
        help="Location for the therapist search (defaults to the configured locality)"
    )
    recommend_parser.add_argument(
        "--user-id",
        default="cli",
        help="Caller identity; pass an empty string to simulate an unauthenticated call"
    )
    subparsers.add_parser("moods", help="Show the mood to query mappings")
    return parser


def main():
    parser = create_parser()
    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)
    app = SerenityApp(args.config)
    try:
        if args.command == "moods":
            app.show_moods()
        elif args.command == "recommend":
            app.initialize()
            app.generate_recommendations(args.mood, args.location, args.user_id)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except RecommendationError as e:
        print(f"Error ({e.code}): {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
