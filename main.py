import json
import logging
import argparse
import sys

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import MatchingError
from database.database import init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def format_run(run) -> dict:
    return {
        'source': run.requirement.source.value,
        'inventory_size': run.inventory_size,
        'eligible_count': run.eligible_count,
        'oracle_used': run.oracle_used,
        'results': [
            {
                'rank': r.rank,
                'property_id': r.property.id,
                'title': r.property.title,
                'deterministic_score': r.deterministic_score,
                'blended_score': r.blended_score,
                'compatibility_level': r.compatibility_level,
                'rationale': r.rationale,
            }
            for r in run.results
        ],
    }


def run_match(ctx: AppContext, lead_id: str, top_k, use_oracle: bool, save_ids) -> int:
    saved_ids = [s.property_id for s in ctx.store.list_for_lead(lead_id)]
    run = ctx.matching_service.find_matches_for_lead(
        lead_id,
        top_k=top_k,
        exclude_ids=saved_ids,
        use_oracle=use_oracle,
    )
    print(json.dumps(format_run(run), indent=2, ensure_ascii=False))

    if save_ids:
        saved = ctx.store.save_selected(lead_id, run.results, save_ids)
        logger.info(f"Saved {len(saved)} match(es) for lead {lead_id}")
    return 0


def run_reverse_match(ctx: AppContext, property_id: str, min_score) -> int:
    candidate = ctx.matching_service.inventory.get_candidate(property_id)
    if candidate is None:
        logger.error(f"Property {property_id} not found")
        return 1

    requirements = ctx.matching_service.lead_source.list_requirements()
    matches = ctx.matching_service.match_leads_for_property(candidate, requirements, min_score=min_score)
    print(json.dumps(
        [{"lead_id": lead_id, "score": score} for lead_id, score in matches],
        indent=2,
    ))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Property-Lead Matching Driver")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument('--lead', type=str, help='Lead id to match against the inventory')
    target.add_argument('--property', type=str, help='Property id to match against all leads')
    parser.add_argument('--min-score', type=int, default=None,
                        help='Reverse match threshold (default from config)')
    parser.add_argument('--top-k', type=int, default=None, help='Result budget (default from config)')
    parser.add_argument('--no-oracle', action='store_true', help='Deterministic ranking only')
    parser.add_argument('--save', type=str, nargs='*', default=[],
                        help='Property ids from this run to save for the lead')
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config file')
    args = parser.parse_args()

    config = load_config(args.config)
    logging.getLogger().setLevel(config.log_level.upper())

    ctx = AppContext.build(config)
    init_db(ctx.session_factory.kw['bind'])

    try:
        if args.property:
            return run_reverse_match(ctx, args.property, args.min_score)
        return run_match(ctx, args.lead, args.top_k, not args.no_oracle, args.save)
    except MatchingError as e:
        logger.error(f"Matching failed for {args.lead or args.property}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
