from lifesync.parsing.response_parser import (
    NutritionExtraction,
    extract_citations,
    extract_nutrition,
    find_video,
)

__all__ = [
    "NutritionExtraction",
    "extract_citations",
    "extract_nutrition",
    "find_video",
]
