from __future__ import annotations

US_TIME_ZONES: tuple[tuple[str, str], ...] = (
    ("America/New_York", "Eastern Time (New York)"),
    ("America/Detroit", "Eastern Time (Detroit)"),
    ("America/Indiana/Indianapolis", "Eastern Time (Indianapolis)"),
    ("America/Kentucky/Louisville", "Eastern Time (Louisville)"),
    ("America/Chicago", "Central Time (Chicago)"),
    ("America/Indiana/Knox", "Central Time (Knox, Indiana)"),
    ("America/Menominee", "Central Time (Menominee)"),
    ("America/North_Dakota/Center", "Central Time (North Dakota)"),
    ("America/Denver", "Mountain Time (Denver)"),
    ("America/Boise", "Mountain Time (Boise)"),
    ("America/Phoenix", "Mountain Time - Arizona (Phoenix)"),
    ("America/Los_Angeles", "Pacific Time (Los Angeles)"),
    ("America/Anchorage", "Alaska Time (Anchorage)"),
    ("America/Juneau", "Alaska Time (Juneau)"),
    ("America/Adak", "Hawaii-Aleutian Time (Adak)"),
    ("Pacific/Honolulu", "Hawaii Time (Honolulu)"),
    ("America/Puerto_Rico", "Atlantic Time (Puerto Rico)"),
    ("Pacific/Guam", "Chamorro Time (Guam)"),
    ("Pacific/Pago_Pago", "Samoa Time (Pago Pago)"),
)

SUCCESS_MESSAGE = "Your changes were saved"
