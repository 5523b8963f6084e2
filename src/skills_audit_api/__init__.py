"""Skills audit API: workforce records, approval workflows and aggregation."""
