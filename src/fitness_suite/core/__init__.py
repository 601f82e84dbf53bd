"""Domain models, plan/log repositories, timers and the AI assistant."""
