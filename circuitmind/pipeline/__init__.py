"""Pipeline stages — topology checking and solution interpretation.

  topology  — user-authored module graph, validated against the catalog
  solution  — model-authored text/JSON, extracted, repaired and normalized
              into typed design solutions
"""
