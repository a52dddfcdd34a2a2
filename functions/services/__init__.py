"""Quote, pricing and rendering services for VINQuoter."""
