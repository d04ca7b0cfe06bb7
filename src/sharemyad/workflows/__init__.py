"""Processing workflows."""
