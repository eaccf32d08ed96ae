"""Per-day stadium/time slot catalogue."""

from datetime import date

from jbsg.models import Slot, SummerWindow, TimeSlots


def is_summer(month: int, day: int, window: SummerWindow | None = None) -> bool:
    """True when the date falls in the summer (longer daylight) window.

    The window is three explicit clauses, not a sunset calculation:
    strictly between the start and end months, or in the start month on or
    after the start day, or in the end month on or before the end day.
    """
    if window is None:
        window = SummerWindow()
    if window.start_month < month < window.end_month:
        return True
    if month == window.start_month and day >= window.start_day:
        return True
    if month == window.end_month and day <= window.end_day:
        return True
    return False


def build_day_slots(d: date, stadiums: list[str],
                    reduced_stadium: str | None = None,
                    time_slots: TimeSlots | None = None,
                    window: SummerWindow | None = None) -> list[Slot]:
    """Ordered slots available on a match day.

    Main stadiums get every summer start time in summer and every standard
    start time otherwise. The reduced-capacity stadium always gets the
    standard times only.

    Slots come out time-major: for each time index, each main stadium in
    configured order, then the reduced stadium. Slot assignment relies on
    this order, so index 0 is the earliest start and the last index the
    latest.
    """
    if time_slots is None:
        time_slots = TimeSlots()

    summer = is_summer(d.month, d.day, window)
    main_times = time_slots.summer if summer else time_slots.standard
    mains = [s for s in stadiums if s != reduced_stadium]
    has_reduced = reduced_stadium is not None and reduced_stadium in stadiums

    slots = []
    for t_idx in range(max(len(time_slots.summer), len(time_slots.standard))):
        if t_idx < len(main_times):
            for name in mains:
                slots.append(Slot(name, main_times[t_idx]))
        if has_reduced and t_idx < len(time_slots.standard):
            slots.append(Slot(reduced_stadium, time_slots.standard[t_idx],
                              reduced=True))
    return slots
