"""
Lectura y escritura de snapshots XML:

<positions>
  <position>
    <depCode>...</depCode>
    <depJob>...</depJob>
    <description>...</description>
  </position>
</positions>
"""
