"""Command line entrypoint for a single progress evaluation."""

import logging

from phase_tracker.app_logging import configure_logging
from phase_tracker.containers import build_container
from phase_tracker.domain.errors import DataError, PhaseValidationError


def main() -> int:
    """Evaluate the configured user's phase progress and print the outcome."""
    container = build_container()
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    print("Phase Tracker")
    try:
        result = container.tracking_service.run(container.settings.user_id)
    except (DataError, PhaseValidationError):
        logger.exception("Progress evaluation failed")
        return 1

    for message in result.messages:
        print(message)
    phase = result.profile.phase
    macros = result.profile.macros
    print(
        f"{phase.kind.value.capitalize()} phase ({phase.status.value}): "
        f"{phase.goal_calories:.2f} kcal, protein {macros.protein_g:.2f} g, "
        f"carbs {macros.carbs_g:.2f} g, fat {macros.fat_g:.2f} g"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
