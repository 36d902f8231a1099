"""Flight briefing backend: METAR weather and SimBrief flight plan ingestion."""
