YELLOW = "#ffff00"
