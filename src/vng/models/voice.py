"""Narrator voice catalogue."""

from typing import List, Optional
from pydantic import BaseModel, Field

from .project import VoiceGender


class VoiceOption(BaseModel):
    """A selectable narrator voice."""

    id: str = Field(..., description="Stable voice identifier")
    name: str = Field(..., description="Display name")
    gender: VoiceGender = Field(..., description="Voice gender")
    language: str = Field(..., description="BCP-47 language code")
    accent: str = Field(..., description="Accent shown to the user")
    provider_voice: str = Field(..., description="Voice name at the speech service")

    class Config:
        """Pydantic config."""
        frozen = True


VOICE_OPTIONS: List[VoiceOption] = [
    VoiceOption(
        id="hindi-female",
        name="Hindi Female Voice",
        gender=VoiceGender.FEMALE,
        language="hi-IN",
        accent="Indian",
        provider_voice="hi-IN-Wavenet-A",
    ),
    VoiceOption(
        id="hindi-male",
        name="Hindi Male Voice",
        gender=VoiceGender.MALE,
        language="hi-IN",
        accent="Indian",
        provider_voice="hi-IN-Wavenet-B",
    ),
    VoiceOption(
        id="english-india-female",
        name="Indian English Female Voice",
        gender=VoiceGender.FEMALE,
        language="en-IN",
        accent="Indian",
        provider_voice="en-IN-Wavenet-A",
    ),
    VoiceOption(
        id="english-india-male",
        name="Indian English Male Voice",
        gender=VoiceGender.MALE,
        language="en-IN",
        accent="Indian",
        provider_voice="en-IN-Wavenet-B",
    ),
]


def get_voice(voice_id: str) -> Optional[VoiceOption]:
    """Look up a voice by id."""
    for voice in VOICE_OPTIONS:
        if voice.id == voice_id:
            return voice
    return None


def voice_for(gender: VoiceGender, language: str) -> VoiceOption:
    """Return the voice matching gender and language, or the first voice."""
    for voice in VOICE_OPTIONS:
        if voice.gender == gender and voice.language == language:
            return voice
    return VOICE_OPTIONS[0]
