ROUGE = "#ff0000"
