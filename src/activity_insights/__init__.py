# Activity analytics pipeline
# Segments users by activity with k-means and derives per-user and team metrics

"""
Modules:

- config.py: constants (column layout, weights, thresholds, paths)
- utils/data_processing.py: CSV loading, preprocessing, feature vectors
- clustering/: k-means segmentation, cluster summaries, nearest neighbours
- utils/analysis.py: per-user metric passes, aggregates, pipeline
- models.py: AnalyticsResult
- visualization/: charts, text report, CSV and workbook exports
- api.py: HTTP endpoint
"""

__version__ = "1.0.0"
