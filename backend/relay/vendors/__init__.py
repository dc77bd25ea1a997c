from .base import VendorAdapter
from .elevenlabs import ElevenLabsAdapter
