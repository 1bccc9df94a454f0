from __future__ import annotations

from enum import Enum


class Species(str, Enum):
    DOG = "Dog"
    CAT = "Cat"
    BIRD = "Bird"
    RABBIT = "Rabbit"
    HAMSTER = "Hamster"
    GUINEA_PIG = "Guinea Pig"
    FISH = "Fish"
    TURTLE = "Turtle"
    OTHER = "Other"


class PetSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "Extra Large"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"


class ActivityLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ResidenceType(str, Enum):
    HOUSE = "House"
    APARTMENT = "Apartment"
    CONDO = "Condo"
    OTHER = "Other"
