"""Fixed content tables: power-ups, combo milestones, tension events."""
from cellbreak.logic.models import PowerUp, PowerUpType, TensionEvent, TensionEventType


# (entry, weight) in draw order; rarer power-ups carry less weight
POWER_UP_CATALOG: tuple[tuple[PowerUp, int], ...] = (
    (PowerUp(type=PowerUpType.SHIELD, duration=5000, color="#00ffff", effect="Invincibility!"), 30),
    (PowerUp(type=PowerUpType.RAPID_FIRE, duration=8000, color="#ff00ff", effect="Rapid Fire!"), 25),
    (PowerUp(type=PowerUpType.MULTI_SHOT, duration=6000, color="#ffff00", effect="Triple Shot!"), 20),
    (PowerUp(type=PowerUpType.SLOW_TIME, duration=4000, color="#00ff00", effect="Time Slow!"), 15),
    (PowerUp(type=PowerUpType.NUKE, duration=0, color="#ff0000", effect="NUKE!"), 5),
    (PowerUp(type=PowerUpType.MAGNET, duration=10000, color="#ff8800", effect="Coin Magnet!"), 20),
    (PowerUp(type=PowerUpType.DOUBLE_POINTS, duration=15000, color="#8800ff", effect="Double Points!"), 15),
)

POWER_UP_TOTAL_WEIGHT = sum(weight for _, weight in POWER_UP_CATALOG)

# Combo milestones: doubled bonus + banner message
COMBO_MILESTONES: dict[int, str] = {
    3: "COMBO x3!",
    5: "NICE STREAK!",
    10: "UNSTOPPABLE!",
    15: "GODLIKE!",
    20: "LEGENDARY!",
    30: "MYTHICAL!",
    50: "TRANSCENDENT!",
}

TENSION_EVENTS: tuple[TensionEvent, ...] = (
    TensionEvent(type=TensionEventType.WARNING, message="INCOMING SWARM!"),
    TensionEvent(type=TensionEventType.ALERT, message="SPEED SURGE!"),
    TensionEvent(type=TensionEventType.DANGER, message="CHAOS MODE!"),
    TensionEvent(type=TensionEventType.CRITICAL, message="SURVIVAL CHALLENGE!"),
)


def power_up_weight(power_up_type: PowerUpType) -> int:
    """Return the selection weight of a catalog entry."""
    for power_up, weight in POWER_UP_CATALOG:
        if power_up.type == power_up_type:
            return weight
    raise KeyError(power_up_type)
