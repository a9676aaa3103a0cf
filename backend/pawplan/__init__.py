"""PawPlan - weekly training plans for dogs."""
