"""Engine module - Runtime layer.

Contains:
- Profile Manager: editing session over the profile store
- Preview Runner: bounded batches of sample passwords
- Password Engine: dispatches profiles to generators
"""

from pwgen_profiles.engine.profile_manager import ProfileManager, PseudoProfile, SaveOutcome
from pwgen_profiles.engine.preview_runner import PreviewOutcome, PreviewRunner
from pwgen_profiles.engine.password_engine import PasswordEngine

__all__ = [
    "ProfileManager",
    "PseudoProfile",
    "SaveOutcome",
    "PreviewOutcome",
    "PreviewRunner",
    "PasswordEngine",
]
