"""
Test suite for the Granny.AI speech-synthesis relay

This package contains unit tests for the relay and its client:
- test_tts_route.py: HTTP contract of /api/text-to-speech
- test_synthesis_service.py: validation, configuration and upstream ordering
- test_elevenlabs_adapter.py: provider request shape and error mapping
- test_errors.py: error taxonomy bodies and statuses
- test_config.py: API key and upstream timeout lookup
- test_health.py: health endpoint
- test_client.py: Python client and granny-speak command
"""
