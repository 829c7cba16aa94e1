"""
Chimera Backend Test Suite

Test structure:
- unit/: Test components in isolation with mocks
- integration/: Full HTTP flows with a file-backed store and patched LiteLLM
- mocks/: Mock LLM client and recording store
"""
