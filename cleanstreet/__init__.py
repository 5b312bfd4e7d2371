"""CleanStreet civic issue reporting API."""
