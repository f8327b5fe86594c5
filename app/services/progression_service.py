"""
Progression service.

Applies progression rules to a user's maxes, from two entry points:

- :meth:`ProgressionService.handle_event`: the automatic path, fed by
  SET_LOGGED / WEEK_COMPLETED / CYCLE_BOUNDARY_REACHED events.  A logged
  set feeds after-session rules, AMRAP rules and the failure counters
  behind deload rules.
- :meth:`ProgressionService.trigger_manual`: an explicit request for one
  progression, optionally limited to one lift and optionally forced.

Each (progression, lift) pair is applied independently and reported as
applied, skipped (with a reason) or error.  Pairs run in ascending
config priority, so a lower number sees the max before a higher one
changes it.  Applying reads the current max, writes a new max row and a
log row in one commit, all while holding a per-(user, lift) lock so
concurrent triggers cannot both read the same previous value.

Idempotency
-----------

Every automatic application records a key naming what triggered it
(``session:<id>``, ``set:<loggedSetId>``, ``week:<cycle>:<week>``,
``cycle:<n>``); a manual application uses ``manual:<cycle>:<week>``.  A
(user, progression, lift, key) tuple is applied at most once, checked
before writing and enforced by a unique index.  Forced manual
applications carry no key.
"""

import datetime
import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.exceptions import NotFoundError, ValidationFailedError
from app.core.locks import KeyedLock
from app.db.repositories.failure_counter import FailureCounterRepository
from app.db.repositories.lift import LiftRepository
from app.db.repositories.lift_max import LiftMaxRepository
from app.db.repositories.prescription import PrescriptionRepository
from app.db.repositories.program import ProgramRepository
from app.db.repositories.progression import (ProgramProgressionRepository, ProgressionLogRepository,
                                             ProgressionRepository, )
from app.db.repositories.user_program_state import UserProgramStateRepository
from app.models.lift_max import LiftMax
from app.models.progression import ProgramProgression, Progression, ProgressionLog
from app.models.user_program_state import UserProgramState
from app.schemas.progression import (AppliedProgression, FailureCounterResponse, ProgressionLogResponse,
                                     TriggerRequest, TriggerResponse, TriggerResult, )
from app.training.events import EventType, StateEvent
from app.training.progression import AnyRule, DeloadOnFailure, TriggerEvent, TriggerType, parse_progression

logger = logging.getLogger(__name__)

Rule = AnyRule

# Event -> triggers it fires
EVENT_TRIGGERS: dict[EventType, tuple[TriggerType, ...]] = {
    EventType.SET_LOGGED: (TriggerType.AFTER_SESSION, TriggerType.AFTER_SET, TriggerType.ON_FAILURE),
    EventType.WEEK_COMPLETED: (TriggerType.AFTER_WEEK,),
    EventType.CYCLE_BOUNDARY_REACHED: (TriggerType.AFTER_CYCLE,),
}

# Triggers tied to the single lift of the logged set
_PER_SET = (TriggerType.AFTER_SET, TriggerType.ON_FAILURE)

ALREADY_APPLIED = "already applied for this trigger"

# Shared by every service instance in the process
_apply_locks = KeyedLock()

# (progression id, lift id, override increment)
Target = tuple[int, int, Optional[float]]


class ProgressionService:
    """Service applying progression rules and reading their history."""

    def __init__(self, session: Session, locks: Optional[KeyedLock] = None):
        self.progressions = ProgressionRepository(session)
        self.configs = ProgramProgressionRepository(session)
        self.logs = ProgressionLogRepository(session)
        self.maxes = LiftMaxRepository(session)
        self.lifts = LiftRepository(session)
        self.states = UserProgramStateRepository(session)
        self.programs = ProgramRepository(session)
        self.prescriptions = PrescriptionRepository(session)
        self.failures = FailureCounterRepository(session)
        self.locks = locks if locks is not None else _apply_locks

    # ------------------------------------------------------------------
    # Manual path
    # ------------------------------------------------------------------

    def trigger_manual(self, user_id: int, request: TriggerRequest) -> TriggerResponse:
        progression = self.progressions.get_by_id(request.progression_id)
        if progression is None:
            raise NotFoundError("Progression", request.progression_id)

        state = self.states.get_by_user(user_id)
        if state is None:
            raise NotFoundError("Enrollment", user_id, message="user not enrolled in a program")

        rule = parse_progression(progression.type, progression.parameters)
        configs = self.configs.list_enabled(state.program_id, progression.id)

        if request.lift_id is not None:
            if self.lifts.get_by_id(request.lift_id) is None:
                raise NotFoundError("Lift", request.lift_id)
            targets: list[Target] = [(progression.id, request.lift_id, _override_for(request.lift_id, configs))]
        else:
            if not configs:
                raise ValidationFailedError("no applicable progressions configured for this program",
                                            field="progressionId")
            targets = self._plan(configs, {progression.id: rule}, user_id, state)
            if not targets:
                raise ValidationFailedError("no lifts to apply this progression to", field="liftId")

        key = None if request.force else f"manual:{state.cycle_iteration}:{state.current_week}"
        context = {
            "manual": True,
            "force": request.force,
            "cycleIteration": state.cycle_iteration,
            "weekNumber": state.current_week,
        }
        trigger = TriggerEvent(trigger_type=rule.trigger)

        response = TriggerResponse()
        for _, lift_id, override in targets:
            response.add(self._apply(user_id, progression, rule, lift_id, trigger, override, key, context))
        logger.info("Manual progression %s for user %s: %s applied, %s skipped, %s errors", progression.id,
                    user_id, response.total_applied, response.total_skipped, response.total_errors)
        return response

    # ------------------------------------------------------------------
    # Automatic path
    # ------------------------------------------------------------------

    def handle_event(self, event: StateEvent) -> TriggerResponse:
        """Apply every enabled config whose rule fires on ``event``, in priority order."""
        response = TriggerResponse()
        trigger_types = EVENT_TRIGGERS.get(event.type, ())
        if not trigger_types:
            return response

        state = self.states.get_by_user(event.user_id)
        if state is None or state.program_id != event.program_id:
            logger.debug("Ignoring %s for user %s: no longer enrolled in program %s", event.type.value,
                         event.user_id, event.program_id)
            return response

        configs = self.configs.list_enabled(event.program_id)
        progressions = self.progressions.get_many({c.progression_id for c in configs})
        rules: dict[int, Rule] = {}
        for progression_id, progression in progressions.items():
            try:
                rule = parse_progression(progression.type, progression.parameters)
            except ValidationFailedError:
                logger.warning("Progression %s has invalid parameters; skipped", progression_id)
                continue
            if rule.trigger in trigger_types:
                rules[progression_id] = rule

        context: dict[str, Any] = {"manual": False, "force": False, "eventType": event.type.value, **event.payload}
        configs = [c for c in configs if c.progression_id in rules]
        for progression_id, lift_id, override in self._plan(configs, rules, event.user_id, state):
            result = self._fire(event, progressions[progression_id], rules[progression_id], lift_id, override,
                                context)
            if result is not None:
                response.add(result)
        return response

    def _fire(self, event: StateEvent, progression: Progression, rule: Rule, lift_id: int,
              override: Optional[float], context: dict[str, Any], ) -> Optional[TriggerResult]:
        """Apply one planned pair; None when the event does not concern this lift."""
        payload = event.payload
        trigger_type = rule.trigger
        key = _event_key(event, trigger_type)

        if trigger_type in _PER_SET and payload.get("liftId") != lift_id:
            return None
        if trigger_type == TriggerType.ON_FAILURE:
            return self._on_failure(event, progression, rule, lift_id, key, context)
        if trigger_type == TriggerType.AFTER_SET:
            trigger = TriggerEvent(trigger_type=trigger_type, lifts_performed=(lift_id,),
                                   reps_performed=payload.get("repsPerformed"),
                                   is_amrap=bool(payload.get("isAmrap")), )
        elif trigger_type == TriggerType.AFTER_SESSION:
            lifts_performed = _lifts_performed(event)
            if lift_id not in lifts_performed:
                return None
            trigger = TriggerEvent(trigger_type=trigger_type, lifts_performed=lifts_performed)
        else:
            trigger = TriggerEvent(trigger_type=trigger_type)
        return self._apply(event.user_id, progression, rule, lift_id, trigger, override, key, context)

    def _on_failure(self, event: StateEvent, progression: Progression, rule: Rule, lift_id: int, key: str,
                    context: dict[str, Any], ) -> Optional[TriggerResult]:
        """Count the logged set against the lift's streak, then try the deload."""
        reps, target = event.payload.get("repsPerformed"), event.payload.get("targetReps")
        if reps is None or target is None:
            return None

        user_id = event.user_id
        with self.locks.hold((user_id, lift_id)):
            if reps >= target:
                self.failures.record_success(user_id, lift_id, progression.id)
                return None
            counter = self.failures.record_failure(user_id, lift_id, progression.id)

        failures = counter.consecutive_failures
        logger.info("Lift %s failed for user %s: %s in a row", lift_id, user_id, failures)
        trigger = TriggerEvent(trigger_type=TriggerType.ON_FAILURE, lifts_performed=(lift_id,),
                               consecutive_failures=failures, )
        result = self._apply(user_id, progression, rule, lift_id, trigger, None, key,
                             {**context, "consecutiveFailures": failures})
        if result.applied and isinstance(rule, DeloadOnFailure) and rule.reset_on_deload:
            with self.locks.hold((user_id, lift_id)):
                self.failures.reset(counter)
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history(self, user_id: int, lift_id: Optional[int] = None) -> list[ProgressionLogResponse]:
        return [ProgressionLogResponse.model_validate(e) for e in self.logs.list_for_user(user_id, lift_id)]

    def failure_counters(self, user_id: int, lift_id: Optional[int] = None) -> list[FailureCounterResponse]:
        return [FailureCounterResponse.model_validate(c) for c in self.failures.list_for_user(user_id, lift_id)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _plan(self, configs: list[ProgramProgression], rules: dict[int, Rule], user_id: int,
              state: UserProgramState, ) -> list[Target]:
        """(progression, lift, override) pairs in the order they apply.

        ``configs`` arrive in ascending priority.  A lift-specific config
        runs at its own priority.  A wildcard config covers every lift the
        program prescribes for which the user has a max of the rule's
        type, at the wildcard's priority, except lifts the same
        progression also names explicitly.
        """
        named = {(c.progression_id, c.lift_id) for c in configs if c.lift_id is not None}
        targets: list[Target] = []
        seen: set[tuple[int, int]] = set()
        for config in configs:
            if config.lift_id is not None:
                lift_ids = [config.lift_id]
            else:
                wildcard_lifts = self._wildcard_lifts(rules[config.progression_id], user_id, state)
                lift_ids = sorted(lift_id for lift_id in wildcard_lifts
                                  if (config.progression_id, lift_id) not in named)
            for lift_id in lift_ids:
                pair = (config.progression_id, lift_id)
                if pair in seen:
                    continue
                seen.add(pair)
                targets.append((config.progression_id, lift_id, config.override_increment))
        return targets

    def _wildcard_lifts(self, rule: Rule, user_id: int, state: UserProgramState) -> set[int]:
        program = self.programs.get_by_id(state.program_id)
        if program is None:
            return set()
        prescribed = self.prescriptions.lift_ids_for_cycle(program.cycle_id)
        return prescribed & self.maxes.lifts_with_max(user_id, rule.max_type)

    def _apply(self, user_id: int, progression: Progression, rule: Rule, lift_id: int, trigger: TriggerEvent,
               override_increment: Optional[float], key: Optional[str], context: dict[str, Any], ) -> TriggerResult:
        result = TriggerResult(progression_id=progression.id, lift_id=lift_id)

        with self.locks.hold((user_id, lift_id)):
            if key is not None and self.logs.exists(user_id, progression.id, lift_id, key):
                return _skipped(result, ALREADY_APPLIED)

            current = self.maxes.get_current(user_id, lift_id, rule.max_type)
            if current is None:
                result.error = f"no current {rule.max_type.value} max for lift {lift_id}"
                logger.warning("Progression %s for user %s: %s", progression.id, user_id, result.error)
                return result

            outcome = rule.evaluate(trigger, lift_id, rule.max_type, current.value, override_increment)
            if not outcome.applied:
                return _skipped(result, outcome.reason)

            applied_at = datetime.datetime.utcnow()
            new_max = LiftMax(user_id=user_id, lift_id=lift_id, type=rule.max_type.value, value=outcome.new_value,
                              effective_date=applied_at, )
            log = ProgressionLog(user_id=user_id, progression_id=progression.id, lift_id=lift_id,
                                 previous_value=outcome.previous_value, new_value=outcome.new_value,
                                 delta=outcome.delta, trigger_type=trigger.trigger_type.value,
                                 trigger_context=dict(context), idempotency_key=key, applied_at=applied_at, )
            try:
                self.logs.record_application(new_max, log)
            except IntegrityError:
                # Lost the race against another process holding the same key
                return _skipped(result, ALREADY_APPLIED)
            except SQLAlchemyError:
                logger.exception("Failed to record progression %s for user %s lift %s", progression.id, user_id,
                                 lift_id)
                result.error = "failed to apply progression"
                return result

        logger.info("Progression %s applied for user %s lift %s: %s -> %s", progression.id, user_id, lift_id,
                    outcome.previous_value, outcome.new_value)
        result.applied = True
        result.result = AppliedProgression(previous_value=outcome.previous_value, new_value=outcome.new_value,
                                           delta=outcome.delta, max_type=rule.max_type.value,
                                           applied_at=applied_at, )
        return result


def _skipped(result: TriggerResult, reason: Optional[str]) -> TriggerResult:
    logger.debug("Progression %s skipped for lift %s: %s", result.progression_id, result.lift_id, reason)
    result.skipped = True
    result.skip_reason = reason
    return result


def _override_for(lift_id: int, configs: list[ProgramProgression]) -> Optional[float]:
    for config in configs:
        if config.lift_id == lift_id:
            return config.override_increment
    for config in configs:
        if config.lift_id is None:
            return config.override_increment
    return None


def _lifts_performed(event: StateEvent) -> tuple[int, ...]:
    if "liftsPerformed" in event.payload:
        return tuple(event.payload["liftsPerformed"])
    if "liftId" in event.payload:
        return (event.payload["liftId"],)
    return ()


def _event_key(event: StateEvent, trigger_type: TriggerType) -> str:
    payload = event.payload
    if trigger_type in _PER_SET:
        return f"set:{payload['loggedSetId']}"
    if event.type == EventType.SET_LOGGED:
        return f"session:{payload['sessionId']}"
    if event.type == EventType.WEEK_COMPLETED:
        return f"week:{payload['cycleIteration']}:{payload['previousWeek']}"
    return f"cycle:{payload['completedCycle']}"
