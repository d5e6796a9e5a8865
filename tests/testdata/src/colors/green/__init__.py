GREEN = "#00ff00"
