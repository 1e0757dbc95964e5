class SharedBus():
    """The medium: idle, or busy with one sender since `start_time`."""

    def __init__(self):
        self.busy = False
        self.sender = None
        self.start_time = None

    @property
    def state(self):
        return "busy" if self.busy else "idle"

    def occupy(self, sender, start_time):
        if self.busy:
            raise RuntimeError(f"bus already busy with node {self.sender}, cannot start node {sender}")
        self.busy = True
        self.sender = sender
        self.start_time = start_time

    def clearance_time(self, setting):
        """When the frame has fully reached the node farthest from the sender."""
        if not self.busy:
            raise RuntimeError("idle bus has no clearance time")
        return self.start_time + setting.t_trans + setting.t_prop * setting.max_distance(self.sender)

    def release(self):
        if not self.busy:
            raise RuntimeError("release on an idle bus")
        sender, start_time = self.sender, self.start_time
        self.busy = False
        self.sender = None
        self.start_time = None
        return sender, start_time

    def __repr__(self):
        if self.busy:
            return f"Busy{{{self.sender}, {self.start_time}}}"
        return "Idle"
