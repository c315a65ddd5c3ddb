"""Enumeration definitions for community events."""

from enum import Enum


class EventCategory(str, Enum):
    """Fixed set of categories an event can belong to."""

    FOOD_DONATION = "Food Donation"
    TREE_PLANTING = "Tree Planting"
    CLEANING = "Cleaning"
