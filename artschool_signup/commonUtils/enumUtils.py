from enum import Enum


class Interest(str, Enum):
    # Class catalog offered on the signup form
    DRAWING = "Drawing"
    OIL_PAINTING = "Oil Painting"
    WATERCOLOR = "Watercolor"
    SCULPTURE = "Sculpture"
    KIDS_CLASSES = "Kids Classes"
    ADULT_CLASSES = "Adult Classes"


class ExperienceLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class SignupStep(int, Enum):
    """
    Steps of the signup wizard.

    Flow:
    1. CONTACT → name, email and phone
    2. INTERESTS → at least one class from the catalog, optional notes
    3. AVAILABILITY → free-text availability plus a review of everything entered
    """
    CONTACT = 0
    INTERESTS = 1
    AVAILABILITY = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()
