"""Category labels for each bucket dimension.

Index i of a label table names slot i of the matching bucket list.
"""

WEEKDAY_LABELS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

HOUR_LABELS = tuple(f"{hour:02d}:00" for hour in range(24))

MONTH_LABELS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEK_LABELS = tuple(f"Week {week}" for week in range(53))
