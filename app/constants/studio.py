# Catalogue values offered by the intake and quotation forms.

EVENT_TYPES = [
    "Engagement",
    "Reception",
    "Wedding",
    "Engagement + Reception + Wedding",
    "Puberty",
    "Baby Shower",
    "Outdoor Shoot",
    "Baby Shoot",
    "Corporate Events",
    "School / Colleges",
    "Other",
]

PACKAGE_TYPES = [
    "Package 1",
    "Package 2",
    "Package 3",
    "Package 4",
    "Package 5",
    "Custom",
]

ADDITIONAL_SERVICES = [
    "LED Wall",
    "Live Streaming",
    "Spinning",
    "Live Frames",
    "Photo Booth",
    "LED Wall + Mixing Unit",
    "Others",
]

SEQUENCE_PAD = 4
