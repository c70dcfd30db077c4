"""Constants shared by the test modules and their fixtures."""

TEST_BASE_URL = "https://dumpling.test"
TEST_API_KEY = "test-key-123"
