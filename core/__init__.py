"""Remote collaborators and the validation steps that need them."""
