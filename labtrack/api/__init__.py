# Read-only views of the lab workflow
