from .numbers import round_half_up


def format_interval(days: float) -> str:
    """
    Human-readable interval label for the grade buttons.

    Examples: "<1d", "1d", "29d", "1mo", "1.0y".
    """
    if days < 1:
        return "<1d"
    if days == 1:
        return "1d"
    if days < 30:
        return f"{days}d"
    if days < 365:
        return f"{round_half_up(days / 30)}mo"
    return f"{days / 365:.1f}y"
