from .reveal_section_controller import RevealSectionController

__all__ = [
    'RevealSectionController',
]
