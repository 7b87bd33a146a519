"""GKE cluster discovery and Kubernetes client materialization."""
