BLUE = "#0000ff"
