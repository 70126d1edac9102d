"""Time formatting helpers"""


def format_time(seconds: float) -> str:
    """
    Format a number of seconds as HH:MM:SS.

    Negative input is shown as zero; hours grow past two digits when needed.
    """
    total = max(0, int(round(seconds)))
    h = total // 3600
    m = (total % 3600) // 60
    s = total % 60
    return f"{h:02}:{m:02}:{s:02}"


def format_title(seconds: float, app_title: str) -> str:
    """Title shown while a timer is focused, e.g. '00:24:59 - TaskFlow'"""
    return f"{format_time(seconds)} - {app_title}"
