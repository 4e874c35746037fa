"""Optional plugins shipped with aleph-elixir."""
