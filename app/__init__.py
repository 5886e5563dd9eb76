"""Policy generation backend (templates, client profiles, tailored policies)."""
