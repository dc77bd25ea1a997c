class VendorAdapter:
    """Base class for upstream speech-synthesis adapters."""

    async def synthesize(self, text: str, voice: str, **params) -> bytes:
        raise NotImplementedError
