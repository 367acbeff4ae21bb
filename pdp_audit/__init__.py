from .analyzer import analyze_page
from .description import analyze_description
from .images import analyze_images
from .specs import analyze_specs

__all__ = ["analyze_page", "analyze_images", "analyze_specs", "analyze_description"]
