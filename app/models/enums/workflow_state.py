# app/models/enums/workflow_state.py
import enum

class WorkflowState(str, enum.Enum):
    yes = "Yes"
    no = "No"
    not_needed = "Not needed"


# Fixed production checklist carried by every order, in display order.
WORKFLOW_FIELDS = (
    "photo_selection",
    "album_design",
    "album_printing",
    "video_editing",
    "outdoor_shoot",
    "album_delivery",
)
