from wwwrite.main import app

app(prog_name="wwwrite")
