from rollsheet.engine.dice import DiceEvaluator, RollOutcome
from rollsheet.engine.roller import Tick
from rollsheet.ui.dice_view import render_session


class FixedEvaluator(DiceEvaluator):
    """Evaluator that hands back queued outcomes instead of rolling."""

    def __init__(self, *outcomes: RollOutcome):
        super().__init__(seed=0)
        self.outcomes = list(outcomes)
        self.calls = []

    def _next(self, call):
        self.calls.append(call)
        return self.outcomes.pop(0)

    def evaluate(self, expression, modifier=0):
        return self._next(("normal", expression, modifier))

    def evaluate_advantage(self, modifier=0):
        return self._next(("advantage", modifier))

    def evaluate_disadvantage(self, modifier=0):
        return self._next(("disadvantage", modifier))


def d20(face: int, modifier: int = 0) -> RollOutcome:
    return RollOutcome(
        expression=f"1d20{modifier:+d}" if modifier else "1d20",
        rolls=(face,),
        kept=(face,),
        modifier=modifier,
        total=face + modifier,
        sides=20,
    )


def tick(engine):
    """Deliver the tick the current session is waiting for."""
    return engine.tick(Tick(engine.session.number))


def render(engine, width, height):
    return render_session(engine.session, width, height, engine.settings.max_visible_dice)


def run_to_showing(engine, limit=50):
    """Feed ticks until the animation settles; returns how many were needed."""
    for n in range(1, limit + 1):
        tick(engine)
        if engine.state.value == "showing":
            return n
    raise AssertionError("engine never reached the showing state")
