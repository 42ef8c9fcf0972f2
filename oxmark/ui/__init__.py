from oxmark.ui import input, screen
